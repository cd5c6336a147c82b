"""Tests for logging helpers."""

import io
import logging

from common.logging_utils import Timer, configure_logging, extra_context, is_debug_enabled


class TestConfigureLogging:
    """Test root logger configuration."""

    def test_level_and_single_handler(self):
        """Test that reconfiguring replaces the console handler."""
        stream = io.StringIO()
        configure_logging("warning", stream=stream)
        configure_logging("debug", stream=stream)
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len([h for h in root.handlers if h.get_name() == "depmeta-console"]) == 1
        logging.getLogger("depmeta.test").debug("hello")
        assert "[DEBUG] hello" in stream.getvalue()

    def test_environment_level(self, monkeypatch):
        """Test DEPMETA_LOG_LEVEL."""
        monkeypatch.setenv("DEPMETA_LOG_LEVEL", "ERROR")
        configure_logging(stream=io.StringIO())
        assert logging.getLogger().level == logging.ERROR

    def test_unknown_level_is_info(self):
        """Test the fallback level."""
        configure_logging("chatty", stream=io.StringIO())
        assert logging.getLogger().level == logging.INFO
        assert not is_debug_enabled(logging.getLogger("depmeta.test"))


class TestHelpers:
    """Test small helpers."""

    def test_extra_context_drops_none(self):
        """Test that None fields are omitted."""
        assert extra_context(event="parse", target=None, count=0) == {"event": "parse", "count": 0}

    def test_timer(self):
        """Test that the timer measures a non-negative duration."""
        assert Timer().duration_ms() == 0
        with Timer() as timer:
            pass
        assert timer.duration_ms() >= 0
