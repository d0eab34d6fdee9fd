"""
Unit tests for the shared logging helpers.
"""

import json
import logging

import pytest

from app.core.shared.logger import (
    ColoredFormatter,
    JSONFormatter,
    configure_logging,
    get_logger,
    get_service_logger,
)


def _record(message: str, context: dict | None = None) -> logging.LogRecord:
    record = logging.LogRecord("service.test", logging.INFO, __file__, 10, message, None, None)
    if context is not None:
        record.context = context
    return record


@pytest.mark.unit
class TestContextLogger:
    def test_with_context_drops_none_values(self):
        log = get_service_logger("order_transition").with_context(tenant_id="t1", order_id=None)

        assert log.context == {"component": "service", "service": "order_transition", "tenant_id": "t1"}

    def test_context_is_attached_to_records(self, caplog):
        log = get_logger("tests.context", {"tenant_id": "t1"})

        with caplog.at_level(logging.INFO, logger="tests.context"):
            log.info("status changed", order_id="o1")

        assert caplog.records[0].context == {"tenant_id": "t1", "order_id": "o1"}
        assert caplog.records[0].getMessage() == "status changed"

    def test_with_context_does_not_mutate_parent(self):
        parent = get_logger("tests.parent", {"a": 1})
        parent.with_context(b=2)

        assert parent.context == {"a": 1}


@pytest.mark.unit
class TestFormatters:
    def test_json_formatter_includes_context(self):
        data = json.loads(JSONFormatter().format(_record("hello", {"tenant_id": "t1"})))

        assert data["message"] == "hello"
        assert data["level"] == "INFO"
        assert data["context"] == {"tenant_id": "t1"}

    def test_colored_formatter_appends_pairs_without_touching_record(self):
        record = _record("hello", {"order_id": "o1"})

        line = ColoredFormatter("%(levelname)s %(message)s").format(record)

        assert line.endswith("| order_id=o1")
        assert record.levelname == "INFO"

    def test_configure_logging_quiets_noisy_loggers(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging(level="debug", format_type="json")

            assert root.level == logging.DEBUG
            assert isinstance(root.handlers[0].formatter, JSONFormatter)
            assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
