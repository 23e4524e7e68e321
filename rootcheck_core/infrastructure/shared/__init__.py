"""
Shared infrastructure utilities.
"""

from .error_handling import (
    ErrorSeverity,
    ErrorContext,
    ErrorInfo,
    ErrorHandlingService,
    get_error_service,
    report_error,
)

__all__ = [
    'ErrorSeverity',
    'ErrorContext',
    'ErrorInfo',
    'ErrorHandlingService',
    'get_error_service',
    'report_error',
]
