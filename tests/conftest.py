"""Pytest configuration for test isolation.

The CLI loads ``.env`` from the working directory and reads ``LEUMI_CARD_*``
variables for credentials, headless mode and log level. A developer's local
environment must not leak into tests, so every test starts with those
variables cleared and the working directory pointed at a temporary path.

CLI invocations also attach a stderr handler to the package logger; it is
removed after each test so later tests do not write to a closed stream.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from leumi_card.logging_setup import ROOT_LOGGER_NAME

_ENV_VARS = (
    "LEUMI_CARD_USERNAME",
    "LEUMI_CARD_PASSWORD",
    "LEUMI_CARD_HEADLESS",
    "LEUMI_CARD_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        # setenv first so teardown also removes values loaded from .env files.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    yield
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        if not isinstance(handler, logging.NullHandler):
            root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
    root.propagate = True
