import io
import logging

import pytest

from leumi_card.logging_setup import (
    ROOT_LOGGER_NAME,
    configure_logging,
    get_logger,
    resolve_level,
)


def _stream_handlers() -> list[logging.Handler]:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    return [h for h in root.handlers if not isinstance(h, logging.NullHandler)]


def test_resolve_level_precedence(monkeypatch):
    assert resolve_level(None) == logging.INFO
    monkeypatch.setenv("LEUMI_CARD_LOG_LEVEL", "warning")
    assert resolve_level(None) == logging.WARNING
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level("15") == 15


def test_resolve_level_rejects_unknown_names():
    with pytest.raises(ValueError, match="unknown log level"):
        resolve_level("chatty")


def test_reconfiguring_replaces_the_handler(monkeypatch):
    first = io.StringIO()
    second = io.StringIO()
    monkeypatch.setattr("sys.stderr", first)
    assert configure_logging("warning") == logging.WARNING
    monkeypatch.setattr("sys.stderr", second)
    assert configure_logging("debug") == logging.DEBUG

    assert len(_stream_handlers()) == 1
    get_logger("leumi_card.transactions").debug("page %d", 3)
    assert first.getvalue() == ""
    assert "DEBUG leumi_card.transactions: page 3" in second.getvalue()


def test_messages_below_level_are_dropped(monkeypatch):
    stream = io.StringIO()
    monkeypatch.setattr("sys.stderr", stream)
    configure_logging("info")
    log = get_logger("leumi_card.pagination")
    log.debug("hidden")
    log.info("shown")
    assert "hidden" not in stream.getvalue()
    assert "shown" in stream.getvalue()


def test_get_logger_stays_under_package_root():
    assert get_logger("leumi_card.api").parent is logging.getLogger(ROOT_LOGGER_NAME)
    with pytest.raises(ValueError):
        get_logger("leumi_cardx.api")
