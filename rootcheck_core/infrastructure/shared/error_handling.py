"""
Shared error handling for degraded check failures.

A check failure never reaches the caller of a verdict: the engine turns it
into the signal's fallback boolean. Every such conversion is reported here
so it is logged once, counted per component, and can be listed next to a
verdict of "not rooted".
"""

import logging
import threading
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def log_level(self) -> int:
        return getattr(logging, self.name)


@dataclass
class ErrorContext:
    """Where a failure happened."""
    operation: str
    component: str
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ErrorInfo:
    """A failure that was converted instead of raised."""
    severity: ErrorSeverity
    message: str
    exception: Optional[BaseException]
    context: ErrorContext
    occurred_at: Optional[datetime] = None
    stack_trace: Optional[str] = None

    def __post_init__(self):
        if not self.occurred_at:
            self.occurred_at = datetime.now()
        if self.exception is not None and not self.stack_trace:
            self.stack_trace = ''.join(
                traceback.format_exception(type(self.exception), self.exception, self.exception.__traceback__)
            )

    @property
    def stats_key(self) -> str:
        return f"{self.context.component}_{self.severity.value}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'component': self.context.component,
            'operation': self.context.operation,
            'severity': self.severity.value,
            'errorType': type(self.exception).__name__ if self.exception is not None else None,
            'message': self.message,
            'metadata': dict(self.context.metadata),
        }


class ErrorHandlingService:
    """
    Logs and counts converted failures.

    Checks may run on a thread pool, so recording is locked. Only the most
    recent `max_recent` failures are kept in full.
    """

    def __init__(self, logger_name: str = "error.handler", max_recent: int = 100):
        self.logger = logging.getLogger(logger_name)
        self.max_recent = max_recent
        self.error_stats: Dict[str, int] = {}
        self._recent: List[ErrorInfo] = []
        self._lock = threading.Lock()

    def handle_error(self, error_info: ErrorInfo) -> None:
        """Count the failure, keep it for reporting and log it at its severity."""
        with self._lock:
            self.error_stats[error_info.stats_key] = self.error_stats.get(error_info.stats_key, 0) + 1
            self._recent.append(error_info)
            del self._recent[:-self.max_recent]

        context = error_info.context
        log_message = f"[{context.component}] {context.operation}: {error_info.message}"
        if context.metadata:
            log_message += f" | Metadata: {context.metadata}"

        # Tracebacks only for failures that are not an expected host quirk
        exc_info = error_info.exception if error_info.severity.log_level >= logging.ERROR else None
        self.logger.log(error_info.severity.log_level, log_message, exc_info=exc_info)

    def get_error_stats(self) -> Dict[str, int]:
        """Failure counts keyed by `<component>_<severity>`."""
        with self._lock:
            return self.error_stats.copy()

    def get_recent_errors(self) -> List[ErrorInfo]:
        with self._lock:
            return list(self._recent)

    def reset_error_stats(self) -> None:
        with self._lock:
            self.error_stats.clear()
            self._recent.clear()


# Global error handling service instance
_error_service = ErrorHandlingService()


def get_error_service() -> ErrorHandlingService:
    """Get the global error handling service."""
    return _error_service


def report_error(exception: BaseException,
                 operation: str,
                 component: str,
                 severity: ErrorSeverity = ErrorSeverity.WARNING,
                 **metadata) -> None:
    """Record a caught exception that is being degraded into a default value."""
    _error_service.handle_error(ErrorInfo(
        severity=severity,
        message=str(exception) or type(exception).__name__,
        exception=exception,
        context=ErrorContext(operation=operation, component=component, metadata=metadata),
    ))
