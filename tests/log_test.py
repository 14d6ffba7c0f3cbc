import logging

import pytest

from bunnyfont import log


@pytest.fixture
def captured():
    records = []
    log.set_level(log.Level.DEBUG)
    log.set_callback(lambda level, text: records.append((level, text)))
    yield records
    log.set_callback(None)
    log.set_level(logging.NOTSET)


def test_message(captured):
    log.info("hello")
    log.warn("careful", "batch")
    assert captured == [(logging.INFO, "hello"), (logging.WARNING, "batch: careful")]


def test_exception_with_traceback(captured):
    try:
        raise ValueError("boom")
    except ValueError as e:
        log.error(e, "Failed to load font")

    level, text = captured[0]
    assert level == logging.ERROR
    assert text.startswith("Failed to load font: ValueError: boom\n")
    assert "Traceback" in text


def test_level_filters(captured):
    log.set_level(log.Level.ERROR)
    log.debug("hidden")
    log.warning("hidden too")
    log.error("shown")
    assert captured == [(logging.ERROR, "shown")]


def test_plain_logging(caplog):
    with caplog.at_level(logging.INFO, logger="bunnyfont"):
        log.info("to logging")
    assert "to logging" in caplog.text


def test_exception_inside_handler(captured):
    try:
        {}["missing"]
    except KeyError:
        log.exception("Lookup failed")

    level, text = captured[0]
    assert level == logging.ERROR
    assert text.startswith("Lookup failed\n")
    assert "KeyError: 'missing'" in text
