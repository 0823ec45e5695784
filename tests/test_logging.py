"""Tests for logging setup and per-symbol context."""

import logging

import structlog

from meanrev.logging import get_logger, setup_logging, symbol_context


def test_setup_sets_root_level_and_quiets_ccxt() -> None:
    setup_logging("DEBUG", "json")
    assert logging.getLogger().level == logging.DEBUG
    assert len(logging.getLogger().handlers) == 1
    assert logging.getLogger("ccxt").level == logging.WARNING


def test_unknown_level_falls_back_to_info() -> None:
    setup_logging("chatty")
    assert logging.getLogger().level == logging.INFO


def test_symbol_context_binds_and_clears() -> None:
    with symbol_context("BTC"):
        assert structlog.contextvars.get_contextvars()["symbol"] == "BTC"
    assert "symbol" not in structlog.contextvars.get_contextvars()


def test_get_logger_logs_without_error() -> None:
    setup_logging("INFO")
    get_logger("meanrev.test").info("test_event", value="1")
