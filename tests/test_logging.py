"""Tests for logging setup, evidence sinks and failure reporting."""
import logging

from rootcheck_core.infrastructure.logging import EnhancedLogger, LoggingEvidenceSink, NullEvidenceSink
from rootcheck_core.infrastructure.shared import ErrorSeverity, get_error_service, report_error


class TestEnhancedLogger:
    def test_log_file_and_restore(self, tmp_path):
        root = logging.getLogger()
        before = root.handlers[:]
        log_file = tmp_path / "logs" / "rootcheck.log"

        logger = EnhancedLogger()
        assert logger.setup_logging(log_file=str(log_file)) == str(log_file)
        logging.getLogger("evidence.su_binary").debug("/sbin/su binary detected!")
        logger.cleanup()

        assert "/sbin/su binary detected!" in log_file.read_text(encoding="utf-8")
        assert root.handlers == before

    def test_cleanup_without_setup(self):
        EnhancedLogger().cleanup()


class TestEvidenceSinks:
    def test_logging_sink_uses_signal_logger(self, caplog):
        with caplog.at_level(logging.INFO, logger="evidence"):
            LoggingEvidenceSink().emit("su_binary", "/sbin/su binary detected!")

        assert caplog.records[-1].name == "evidence.su_binary"
        assert caplog.records[-1].getMessage() == "/sbin/su binary detected!"

    def test_null_sink(self, caplog):
        sink = NullEvidenceSink()
        with caplog.at_level(logging.DEBUG):
            sink.emit("su_binary", "ignored")
        assert not sink.enabled
        assert "ignored" not in caplog.text


class TestReportError:
    def test_counts_and_keeps_failures(self):
        report_error(ValueError("bad line"), operation="run_signal", component="rw_paths")
        report_error(OSError("gone"), operation="run_signal", component="rw_paths",
                     severity=ErrorSeverity.ERROR)

        service = get_error_service()
        assert service.get_error_stats() == {"rw_paths_warning": 1, "rw_paths_error": 1}

        recent = service.get_recent_errors()
        assert [error.to_dict()['errorType'] for error in recent] == ["ValueError", "OSError"]

    def test_logged_at_severity(self, caplog):
        with caplog.at_level(logging.WARNING, logger="error.handler"):
            report_error(RuntimeError("boom"), operation="run_signal", component="su_exists")
        assert "[su_exists] run_signal: boom" in caplog.text
