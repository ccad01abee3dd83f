# tests/unit/test_validation.py
"""Unit tests for input sanitization helpers and the JSON log formatter."""

import json
import logging

import pytest

from willowbank.errors import BadInput
from willowbank.logging_config import JsonFormatter
from willowbank.models.records import WaterNeeds
from willowbank.models.requests import ReorderRequest, TaskUpdate
from willowbank.validation import (
    like_pattern,
    parse_bool_flag,
    parse_enum_filter,
    sanitize_search,
    validate_payload,
)


class TestBoolFlag:
    @pytest.mark.parametrize("raw", ["true", "TRUE", "1", " yes "])
    def test_truthy(self, raw):
        assert parse_bool_flag("native", raw) is True

    @pytest.mark.parametrize("raw", ["false", "0", "No"])
    def test_falsy(self, raw):
        assert parse_bool_flag("native", raw) is False

    def test_absent(self):
        assert parse_bool_flag("native", None) is None

    @pytest.mark.parametrize("raw", ["", "  "])
    def test_empty_means_absent(self, raw):
        assert parse_bool_flag("native", raw) is None

    def test_garbage(self):
        with pytest.raises(BadInput, match='"native" must be true or false'):
            parse_bool_flag("native", "perhaps")


class TestEnumFilter:
    def test_valid(self):
        assert parse_enum_filter("water_needs", "low", WaterNeeds) is WaterNeeds.LOW

    def test_empty_means_absent(self):
        assert parse_enum_filter("water_needs", "", WaterNeeds) is None

    def test_unknown_lists_allowed_values(self):
        with pytest.raises(BadInput, match="low, moderate, high"):
            parse_enum_filter("water_needs", "soggy", WaterNeeds)


class TestSearch:
    def test_strips_and_truncates(self):
        assert sanitize_search("  oak  ") == "oak"
        assert sanitize_search("   ") is None
        assert len(sanitize_search("x" * 500)) == 200

    def test_like_pattern_escapes_wildcards(self):
        assert like_pattern("50%_off") == "%50\\%\\_off%"


class TestValidatePayload:
    def test_non_object_rejected(self):
        with pytest.raises(BadInput, match="JSON object"):
            validate_payload(TaskUpdate, "completed")

    def test_changes_only_contains_sent_fields(self):
        model = validate_payload(TaskUpdate, {"notes": "  mulch  "})
        assert model.changes() == {"notes": "mulch"}

    def test_reorder_accepts_alias_and_field_name(self):
        assert validate_payload(ReorderRequest, {"orderedIds": [3, 1]}).ordered_ids == [3, 1]
        assert validate_payload(ReorderRequest, {"ordered_ids": [2]}).ordered_ids == [2]

    @pytest.mark.parametrize("ids", [[True], ["2"], [1.0], [-1], [2**63]])
    def test_reorder_rejects_non_integer_or_out_of_range_ids(self, ids):
        with pytest.raises(BadInput, match="orderedIds"):
            validate_payload(ReorderRequest, {"orderedIds": ids})

    def test_integer_fields_bounded_to_sqlite_range(self):
        with pytest.raises(BadInput, match="order_index"):
            validate_payload(TaskUpdate, {"order_index": 2**63})
        assert validate_payload(TaskUpdate, {"order_index": 2**63 - 1}).order_index == 2**63 - 1


def test_json_formatter_emits_one_object():
    record = logging.LogRecord("willowbank.test", logging.INFO, __file__, 1, "hello %s", ("there",), None)

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "willowbank.test"
    assert payload["msg"] == "hello there"
    assert "exc" not in payload
