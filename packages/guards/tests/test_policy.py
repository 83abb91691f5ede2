"""Tests for the error policy."""

import logging

import pytest

from dataknobs_guards import (
    ErrorPolicy,
    GuardConfigError,
    GuardError,
    ReportingMode,
    logging_error_handler,
)


class TestErrorPolicy:
    """Test routing of reported failures."""

    def test_default_mode_raises(self):
        """Test that the default policy raises the reported error."""
        policy = ErrorPolicy()
        error = GuardError("boom")
        assert policy.mode is ReportingMode.DEFAULT
        with pytest.raises(GuardError) as exc_info:
            policy.report(error)
        assert exc_info.value is error

    def test_custom_mode_calls_handler(self):
        """Test that a configured handler receives the message."""
        received = []
        policy = ErrorPolicy(received.append)
        assert policy.mode is ReportingMode.CUSTOM
        policy.report(GuardError("boom"))
        assert received == ["boom"]

    def test_suppression_forces_raise(self):
        """Test that suppression overrides the handler."""
        received = []
        policy = ErrorPolicy(received.append)
        with policy.suppress():
            assert policy.suppressed is True
            with pytest.raises(GuardError):
                policy.report(GuardError("boom"))
        assert policy.suppressed is False
        assert received == []

    def test_suppression_restored_on_error(self):
        """Test that suppression is reset when the block raises."""
        policy = ErrorPolicy(lambda message: None)
        with pytest.raises(GuardError):
            with policy.suppress():
                policy.report(GuardError("boom"))
        assert policy.suppressed is False

    def test_nested_suppression(self):
        """Test that leaving an inner scope keeps the outer scope suppressed."""
        policy = ErrorPolicy()
        with policy.suppress():
            with policy.suppress():
                pass
            assert policy.suppressed is True
        assert policy.suppressed is False

    def test_collect(self):
        """Test that collection captures reports and notices."""
        received = []
        policy = ErrorPolicy(received.append)
        with policy.collect() as messages:
            policy.report(GuardError("first"))
            policy.notify("second")
        assert messages == ["first", "second"]
        assert received == []

    def test_collect_clears_outer_suppression(self):
        """Test that a collection scope nested in a suppressed scope collects."""
        policy = ErrorPolicy()
        with policy.suppress():
            with policy.collect() as messages:
                policy.report(GuardError("inner"))
            assert policy.suppressed is True
        assert messages == ["inner"]

    def test_notify_without_handler_only_logs(self, caplog):
        """Test that notices are logged when nothing else receives them."""
        policy = ErrorPolicy()
        with caplog.at_level(logging.DEBUG, logger="dataknobs_guards.policy"):
            policy.notify("note")
        assert "note" in caplog.text

    def test_independent_policies(self):
        """Test that suppression state is private to each policy."""
        first = ErrorPolicy()
        second = ErrorPolicy()
        with first.suppress():
            assert second.suppressed is False


class TestLoggingErrorHandler:
    """Test the logging handler factory."""

    def test_logs_messages(self, caplog):
        """Test that messages are logged at the configured level."""
        handler = logging_error_handler("myapp.validation", "INFO")
        with caplog.at_level(logging.INFO, logger="myapp.validation"):
            handler("bad value")
        assert caplog.records[-1].levelno == logging.INFO
        assert caplog.records[-1].getMessage() == "bad value"

    def test_numeric_level(self, caplog):
        """Test a numeric level."""
        handler = logging_error_handler("myapp.validation", logging.ERROR)
        with caplog.at_level(logging.ERROR, logger="myapp.validation"):
            handler("bad value")
        assert caplog.records[-1].levelno == logging.ERROR

    def test_unknown_level(self):
        """Test that an unknown level name is rejected."""
        with pytest.raises(GuardConfigError):
            logging_error_handler("x", "LOUD")
