"""
Unit Tests for the logging subsystem
====================================

Test Coverage
-------------
- JSON formatting with context and extra fields
- Context filter defaults
- LogContext scoping and the set/clear helpers
"""

import json
import logging

import pytest

from focusquest.core.logging import LogContext, clear_log_context, get_log_context, set_log_context
from focusquest.core.logging.logger import ContextFilter, JSONFormatter


def _record(msg="Battle completed %s", args=("ok",), **extra):
    record = logging.LogRecord(
        name="focusquest.modules.combat.battle_engine",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=args,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def _clean_context():
    clear_log_context()
    yield
    clear_log_context()


@pytest.mark.unit
class TestContextFilter:
    def test_defaults_without_context(self):
        # Arrange
        record = _record()

        # Act
        ContextFilter().filter(record)

        # Assert
        assert record.user_id == "N/A"
        assert record.operation == "N/A"
        assert record.component == "battle_engine"

    def test_uses_scoped_context(self):
        record = _record()

        with LogContext(user_id="u-1", operation="battle", correlation_id="abc"):
            ContextFilter().filter(record)

        assert (record.user_id, record.operation, record.correlation_id) == ("u-1", "battle", "abc")


@pytest.mark.unit
class TestJSONFormatter:
    def test_payload_shape(self):
        # Arrange
        record = _record(opponent="Rival", gold=30)
        with LogContext(user_id="u-7", operation="battle"):
            ContextFilter().filter(record)

        # Act
        payload = json.loads(JSONFormatter().format(record))

        # Assert
        assert payload["message"] == "Battle completed ok"
        assert payload["level"] == "INFO"
        assert payload["user_id"] == "u-7"
        assert payload["component"] == "battle_engine"
        assert payload["extra"] == {"opponent": "Rival", "gold": 30}

    def test_unset_context_is_omitted(self):
        record = _record()
        ContextFilter().filter(record)

        payload = json.loads(JSONFormatter().format(record))

        assert "user_id" not in payload
        assert "extra" not in payload


@pytest.mark.unit
class TestContextHelpers:
    def test_log_context_restores_previous(self):
        # Arrange
        set_log_context(user_id="outer")

        # Act
        with LogContext(user_id="inner"):
            inner = get_log_context()["user_id"]

        # Assert
        assert inner == "inner"
        assert get_log_context()["user_id"] == "outer"

    def test_set_merges_and_clear_empties(self):
        set_log_context(user_id=5)
        set_log_context(operation="raid_attempt", boss_id="b-1")

        assert get_log_context() == {"user_id": "5", "operation": "raid_attempt", "boss_id": "b-1"}

        clear_log_context()
        assert get_log_context() == {}
