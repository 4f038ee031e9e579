"""
Mana Logging Configuration Tests
"""

import io
import logging
import os
import sys

import structlog

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mana.log import LOG_LEVEL_ENV, configure_logging, get_log_level


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert get_log_level() == logging.DEBUG


def test_default_level(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    assert get_log_level() == logging.WARNING


def test_unknown_level_falls_back(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "chatty")
    assert get_log_level() == logging.WARNING


def test_events_filtered_by_level():
    stream = io.StringIO()
    try:
        configure_logging(logging.INFO, stream)
        log = structlog.get_logger("mana.test")
        log.debug("hidden_event")
        log.info("shown_event", tag="int")
        output = stream.getvalue()
        assert "shown_event" in output
        assert "tag=int" in output
        assert "hidden_event" not in output
    finally:
        configure_logging(logging.WARNING)
