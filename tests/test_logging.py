"""Tests for logging setup and lock lifecycle log records."""

from __future__ import annotations

import io
import json
import logging
import sys
import time

import pytest

from leaselock import LockedError, Locker, setup_logging
from leaselock.core.logging import ContextLoggerAdapter, JSONFormatter, with_log_context


@pytest.fixture
def restore_root_logging():
    handlers = logging.root.handlers[:]
    level = logging.root.level
    yield
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    for handler in handlers:
        logging.root.addHandler(handler)
    logging.root.setLevel(level)


def test_setup_logging_json_output(restore_root_logging):
    stream = io.StringIO()
    logger = setup_logging(log_level="DEBUG", log_format="json", stream=stream)

    logger.info("hello", extra={"resource": "/data/a.csv"})

    entry = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert entry["message"] == "hello"
    assert entry["level"] == "INFO"
    assert entry["logger"] == "leaselock"
    assert entry["resource"] == "/data/a.csv"


def test_setup_logging_level_from_environment(restore_root_logging, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    setup_logging(stream=io.StringIO())
    assert logging.root.level == logging.WARNING


def test_setup_logging_invalid_level_falls_back_to_info(restore_root_logging, capsys):
    setup_logging(log_level="LOUD", stream=io.StringIO())
    assert logging.root.level == logging.INFO
    assert "Invalid log level 'LOUD'" in capsys.readouterr().err


def test_with_log_context_merges_fields():
    base = logging.getLogger("leaselock.test")
    adapter = with_log_context(with_log_context(base, resource="a"), marker="a.lock", ignored=None)

    assert isinstance(adapter, ContextLoggerAdapter)
    assert adapter.extra == {"resource": "a", "marker": "a.lock"}


def test_with_log_context_passes_through_non_loggers():
    sentinel = object()
    assert with_log_context(sentinel, resource="a") is sentinel


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad")
    except ValueError:
        record = logging.getLogger("x").makeRecord("x", logging.ERROR, __file__, 1, "failed", (), None)
        record.exc_info = sys.exc_info()
    entry = json.loads(JSONFormatter().format(record))
    assert "ValueError: bad" in entry["exception"]


def test_locker_logs_lifecycle_with_context(resource, caplog):
    caplog.set_level(logging.DEBUG, logger="leaselock")
    locker = Locker()

    locker.acquire(resource)
    with pytest.raises(LockedError):
        locker.acquire(resource)
    locker.renew(resource)
    locker.release(resource)

    messages = [record.getMessage() for record in caplog.records]
    assert "Acquired lock" in messages
    assert "Lock is held by another caller" in messages
    assert "Renewed lock" in messages
    assert "Released lock" in messages
    acquired = next(record for record in caplog.records if record.getMessage() == "Acquired lock")
    assert acquired.resource == str(resource)
    assert acquired.marker == f"{resource}.lock"


def test_locker_uses_injected_logger(resource, caplog):
    custom = logging.getLogger("app.jobs")
    caplog.set_level(logging.DEBUG, logger="app.jobs")

    Locker(logger=custom).release(resource)

    assert [record.name for record in caplog.records] == ["app.jobs"]
    assert caplog.records[0].getMessage() == "Release of unlocked resource ignored"


def test_locker_logs_reclamation(resource, caplog):
    caplog.set_level(logging.DEBUG, logger="leaselock")
    locker = Locker(lease_seconds=0.01)
    locker.acquire(resource)
    time.sleep(0.05)
    locker.acquire(resource)

    assert any(record.getMessage().startswith("Reclaiming expired marker") for record in caplog.records)
