from __future__ import annotations

import io
import logging

from guest_import.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    reset_logging,
    set_debug,
    setup_logging,
)


def _record(level: int, msg: str) -> logging.LogRecord:
    return logging.LogRecord(LOGGER_NAME, level, __file__, 1, msg, None, None)


def test_labeled_formatter_labels():
    fmt = LabeledFormatter()
    assert fmt.format(_record(logging.INFO, "hello")) == "INFO hello"
    assert fmt.format(_record(logging.WARNING, "careful")) == "WARN careful"
    assert fmt.format(_record(logging.ERROR, "boom")) == "ERROR boom"
    assert fmt.format(_record(SUMMARY_LEVEL, "files=1")) == "SUMMARY files=1"


def test_setup_logging_idempotent():
    reset_logging()
    a = setup_logging()
    b = setup_logging()
    assert a is b
    assert len(a.handlers) == 1
    assert a.propagate is False
    reset_logging()


def test_reset_does_not_duplicate_handlers():
    reset_logging()
    setup_logging()
    reset_logging()
    logger = setup_logging()
    assert len(logger.handlers) == 1
    reset_logging()


def test_output_goes_to_stdout(capsys):
    reset_logging()
    logger = get_logger()
    logger.info("checking")
    logging.getLogger(f"{LOGGER_NAME}.services.pipeline").warning("child")
    log_summary("files=0")
    out = capsys.readouterr().out
    assert "INFO checking" in out
    assert "WARN child" in out
    assert "SUMMARY files=0" in out
    reset_logging()


def test_set_debug(capsys):
    reset_logging()
    logger = setup_logging()
    logger.debug("hidden")
    set_debug(logger)
    logger.debug("shown")
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "DEBUG shown" in out
    logger.setLevel(logging.INFO)
    reset_logging()


def test_setup_logging_custom_stream():
    reset_logging()
    stream = io.StringIO()
    logger = setup_logging(stream=stream)
    logger.warning("to buffer")
    log_summary("files=2")
    assert stream.getvalue().splitlines() == ["WARN to buffer", "SUMMARY files=2"]
    reset_logging()


def test_reset_keeps_foreign_handlers():
    reset_logging()
    logger = setup_logging()
    other = logging.NullHandler()
    logger.addHandler(other)
    try:
        reset_logging()
        assert logger.handlers == [other]
        assert logger.propagate is True
    finally:
        logger.removeHandler(other)
