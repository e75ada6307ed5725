from __future__ import annotations

import json
import logging
import sys

import pytest

from site_cms.app.core.logging import JsonFormatter, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg="hello", *, exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord("site_cms.test", logging.INFO, __file__, 1, msg, (), exc_info)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_http_context():
    payload = json.loads(
        JsonFormatter().format(_record(http_method="POST", path="/api/media/upload", status_code=400))
    )
    assert payload["message"] == "hello"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "site_cms.test"
    assert payload["http"] == {"method": "POST", "path": "/api/media/upload", "status": 400}


def test_json_formatter_includes_upload_context():
    payload = json.loads(JsonFormatter().format(_record(media_key="media/a.webp", upload_state="persisted")))
    assert payload["media_key"] == "media/a.webp"
    assert payload["upload_state"] == "persisted"
    assert "http" not in payload


def test_json_formatter_keeps_arabic_readable():
    out = JsonFormatter().format(_record("الملف غير موجود"))
    assert "الملف غير موجود" in out


def test_json_formatter_truncates_stack(monkeypatch):
    monkeypatch.setenv("LOG_STACK_LIMIT", "20")
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record("failed", exc_info=sys.exc_info())
    payload = json.loads(JsonFormatter().format(record))
    assert payload["error"]["type"] == "RuntimeError"
    assert payload["error"]["message"] == "boom"
    assert payload["error"]["stack"].endswith("...(truncated)")


@pytest.mark.parametrize("fmt, expected", [("json", JsonFormatter), ("plain", logging.Formatter)])
def test_setup_logging_selects_formatter(fmt, expected):
    setup_logging(level="warning", fmt=fmt)
    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert type(root.handlers[0].formatter) is expected
    assert logging.getLogger("pymongo").level == logging.WARNING


def test_setup_logging_reads_env(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "error")
    monkeypatch.setenv("LOG_FORMAT", "JSON")
    setup_logging()
    root = logging.getLogger()
    assert root.level == logging.ERROR
    assert isinstance(root.handlers[0].formatter, JsonFormatter)
