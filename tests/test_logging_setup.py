import io
import logging

import pytest

from passbook.logging_setup import configure_logging, get_logger, reset_logging


def test_level_from_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PASSBOOK_LOG_LEVEL", "warning")
    stream = io.StringIO()
    logger = configure_logging(stream=stream)
    assert logger.level == logging.WARNING

    get_logger("passbook.ledger").info("hidden")
    get_logger("passbook.ledger").warning("assemble_ledger:shown count=1")
    assert "hidden" not in stream.getvalue()
    assert "passbook.ledger WARNING assemble_ledger:shown count=1" in stream.getvalue()


def test_second_configure_is_a_no_op():
    first = io.StringIO()
    configure_logging("DEBUG", stream=first)
    configure_logging("ERROR", stream=io.StringIO())
    logger = logging.getLogger("passbook")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1

    reset_logging()
    assert logger.handlers == []


def test_unconfigured_package_logger_is_silent():
    get_logger("passbook.sequencing")
    handlers = logging.getLogger("passbook").handlers
    assert handlers and all(isinstance(h, logging.NullHandler) for h in handlers)
