from __future__ import annotations

import json
import logging

from record_collector.utils.logging import _json_formatter, configure_logging

EXPECTED_ITEMS = 50
EXPECTED_WORKERS = 5


def _record() -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="hello",
        args=(),
        exc_info=None,
    )


def test_json_formatter_promotes_standard_extra_fields() -> None:
    record = _record()
    record.items = EXPECTED_ITEMS
    record.pool = "threaded"

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["items"] == EXPECTED_ITEMS
    assert payload["pool"] == "threaded"
    assert "pathname" not in payload


def test_json_formatter_supports_legacy_nested_extra_field() -> None:
    record = _record()
    record.extra = {"workers": EXPECTED_WORKERS}

    payload = json.loads(_json_formatter(record))

    assert payload["workers"] == EXPECTED_WORKERS


def test_json_formatter_stringifies_unserializable_values() -> None:
    record = _record()
    record.per_worker = {1, 2}

    payload = json.loads(_json_formatter(record))

    assert isinstance(payload["per_worker"], str)


def test_configure_logging_sets_root_level() -> None:
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, list(root.handlers)
    try:
        configure_logging(level="WARNING", json_logs=True)
        assert root.level == logging.WARNING
        assert any(h.formatter.__class__.__name__ == "JsonFormatter" for h in root.handlers)
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
