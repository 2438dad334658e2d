"""Tests for logging configuration."""

import logging

import pytest

from rapprochement.logging_setup import LOG_LEVEL_ENV, configure_logging, parse_level


def test_parse_level_names_and_numbers():
    """Test accepted level spellings."""
    assert parse_level("debug") == logging.DEBUG
    assert parse_level(" INFO ") == logging.INFO
    assert parse_level("10") == 10
    assert parse_level(logging.ERROR) == logging.ERROR


def test_parse_level_default(monkeypatch):
    """Test the WARNING default and the environment override."""
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    assert parse_level(None) == logging.WARNING

    monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
    assert parse_level(None) == logging.DEBUG


def test_parse_level_unknown():
    """Test that unknown level names are rejected."""
    with pytest.raises(ValueError):
        parse_level("LOUD")


def test_configure_logging_sets_package_level():
    """Test that the package logger gets the requested level."""
    configure_logging("INFO")
    assert logging.getLogger("rapprochement").level == logging.INFO
    configure_logging("WARNING")
