"""Tests for logging setup."""

import logging

import pytest

from bulkledger.utils.logger import LOG_FORMAT, setup_logging


def test_default_level_is_warning(monkeypatch):
    monkeypatch.delenv("BULKLEDGER_LOG_LEVEL", raising=False)

    logger = setup_logging()

    assert logger.name == "bulkledger"
    assert logger.level == logging.WARNING


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv("BULKLEDGER_LOG_LEVEL", "debug")
    assert setup_logging().level == logging.DEBUG


def test_argument_overrides_environment(monkeypatch):
    monkeypatch.setenv("BULKLEDGER_LOG_LEVEL", "DEBUG")
    assert setup_logging("error").level == logging.ERROR


def test_single_handler_with_format():
    setup_logging("INFO")
    logger = setup_logging("INFO")

    assert len(logger.handlers) == 1
    assert logger.handlers[0].formatter._fmt == LOG_FORMAT


def test_unknown_level():
    with pytest.raises(ValueError):
        setup_logging("LOUD")
