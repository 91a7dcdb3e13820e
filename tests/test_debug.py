"""
Logging tests for the DebugManager: levels, component filter and timers.
"""

import logging

import pytest

from standalone_connect4.debug import LOGGER_NAME, TRACE, DebugLevel, DebugManager, debug


class TestDebugManager:
    def test_level_filtering(self):
        manager = DebugManager(DebugLevel.INFO)
        assert manager.is_enabled_for(DebugLevel.ERROR)
        assert manager.is_enabled_for(DebugLevel.INFO)
        assert not manager.is_enabled_for(DebugLevel.DEBUG)
        assert not manager.is_enabled_for(DebugLevel.NONE)

    def test_disabled(self):
        manager = DebugManager(DebugLevel.TRACE)
        manager.configure(enabled=False)
        assert not manager.is_enabled_for(DebugLevel.ERROR)

    def test_component_filter(self, caplog):
        debug.configure(level=DebugLevel.DEBUG, components=["search"])
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            debug.debug("kept", "search")
            debug.debug("dropped", "board")
        assert "[search] kept" in caplog.text
        assert "dropped" not in caplog.text

    def test_trace_level(self, caplog):
        debug.set_from_string("trace")
        assert debug.level == DebugLevel.TRACE
        assert logging.getLogger(LOGGER_NAME).level == TRACE
        with caplog.at_level(TRACE, logger=LOGGER_NAME):
            debug.trace("deep detail", "tt")
        assert "deep detail" in caplog.text

    def test_set_from_string(self):
        debug.set_from_string(" Info ")
        assert debug.level == DebugLevel.INFO
        with pytest.raises(ValueError):
            debug.set_from_string("verbose")
        assert debug.level == DebugLevel.INFO

    def test_timer(self, caplog):
        debug.configure(level=DebugLevel.DEBUG)
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            with debug.timer("block", "search"):
                sum(range(1000))
        assert debug.last_timing("block") >= 0.0
        assert "Performance [block]" in caplog.text
        assert debug.last_timing("never") is None

    def test_log_file(self, tmp_path):
        path = tmp_path / "engine.log"
        debug.configure(level=DebugLevel.INFO, log_file=str(path))
        try:
            debug.info("written to file", "cli")
        finally:
            debug.configure(log_file="")
        assert "[cli] written to file" in path.read_text()

    def test_single_console_handler(self):
        DebugManager()
        DebugManager()
        consoles = [h for h in logging.getLogger(LOGGER_NAME).handlers
                    if getattr(h, "_c4_console", False)]
        assert len(consoles) == 1
