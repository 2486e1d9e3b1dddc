"""
Test that scout_logging can be imported without circular import and logger works.
"""

from __future__ import annotations

import json

import structlog


def test_logging_import():
    """Import get_logger from scout_logging and use the logger."""
    from signer_scout.scout_logging import get_logger

    logger = get_logger("test")
    assert logger is not None
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "warning")
    assert hasattr(logger, "error")
    # Smoke test: call info (should not raise)
    logger.info("test_message", key="value")


def test_configure_logging_json_output(capsys):
    """JSON format renders event_type, level, logger name and the custom timestamp."""
    from signer_scout.scout_logging import configure_logging, get_logger

    try:
        configure_logging(level="INFO", fmt="json", date_format="%m-%d %H:%M:%S")
        get_logger("signer_scout.test").info("json_event", total=3)
        line = capsys.readouterr().out.strip().splitlines()[-1]
        data = json.loads(line)
        assert data["event_type"] == "json_event"
        assert data["total"] == 3
        assert data["level"] == "info"
        assert data["logger_name"] == "signer_scout.test"
        # "%m-%d %H:%M:%S" -> e.g. "10-18 12:34:56"
        assert len(data["timestamp"]) == 14
    finally:
        structlog.reset_defaults()


def test_configure_logging_level_filters_debug(capsys):
    from signer_scout.scout_logging import configure_logging, get_logger

    try:
        configure_logging(level="WARNING", fmt="json")
        log = get_logger("signer_scout.test")
        log.info("hidden_event")
        log.warning("shown_event")
        out = capsys.readouterr().out
        assert "hidden_event" not in out
        assert "shown_event" in out
    finally:
        structlog.reset_defaults()


def test_every_subpackage_imports_with_module_loggers():
    """Module-level get_logger(__name__) calls must not fail at import time."""
    import importlib

    for name in (
        "signer_scout.config",
        "signer_scout.core",
        "signer_scout.discovery",
        "signer_scout.export",
        "signer_scout.scout_logging",
        "signer_scout.solana_rpc",
        "signer_scout.tools.discover_signers",
        "signer_scout.utils.address_utils",
    ):
        assert importlib.import_module(name) is not None


def test_get_logger_binds_module_name():
    from signer_scout.scout_logging import get_logger
    from structlog.testing import capture_logs

    with capture_logs() as logs:
        get_logger("signer_scout.discovery.pipeline").info("named_event")

    assert logs == [
        {"event": "named_event", "log_level": "info", "logger_name": "signer_scout.discovery.pipeline"}
    ]
