"""
Logging infrastructure: console/file setup and evidence sinks.
"""

from .enhanced_logging import EnhancedLogger, enhanced_logger
from .evidence_sink import EvidenceSink, NullEvidenceSink, LoggingEvidenceSink

__all__ = [
    'EnhancedLogger',
    'enhanced_logger',
    'EvidenceSink',
    'NullEvidenceSink',
    'LoggingEvidenceSink',
]
