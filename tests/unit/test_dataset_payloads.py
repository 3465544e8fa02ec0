"""Tests for dataset payload parsing, key validation and workflow references."""

import pytest

from pindown.domain.enums import DatasetFormat
from pindown.domain.exceptions import ValidationException
from pindown.domain.value_objects import (
    JsonPayload,
    MarkdownPayload,
    extract_workflow_sources,
    is_valid_key,
    parse_dataset_payload,
    payload_from_record,
    validate_keys,
    validate_round_trip,
)


class TestKeys:
    @pytest.mark.parametrize("key", ["abc", "p-Nabc_1", "ünïcode"])
    def test_valid(self, key: str) -> None:
        assert is_valid_key(key)

    @pytest.mark.parametrize("key", ["", "a.b", "a$b", "a#b", "a[b", "a]b", "a/b", "a\nb"])
    def test_invalid(self, key: str) -> None:
        assert not is_valid_key(key)

    def test_too_long(self) -> None:
        assert not is_valid_key("x" * 769)

    def test_nested_keys_checked(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            validate_keys({"ok": [{"bad.key": 1}]}, "data")
        assert exc_info.value.details == {"field": "data"}


class TestParseDatasetPayload:
    def test_json_string_is_parsed(self) -> None:
        payload = parse_dataset_payload("json", '{"rows": [1, 2]}')
        assert payload == JsonPayload({"rows": [1, 2]})
        assert payload.format is DatasetFormat.JSON
        assert payload.to_record() == {"rows": [1, 2]}

    def test_json_structured_value_accepted(self) -> None:
        assert parse_dataset_payload(DatasetFormat.JSON, [1, 2]).value == [1, 2]

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            parse_dataset_payload("json", "{not json")
        assert exc_info.value.message.startswith("Invalid JSON data")
        assert exc_info.value.details == {"field": "data"}

    def test_json_with_unstorable_key_raises(self) -> None:
        with pytest.raises(ValidationException):
            parse_dataset_payload("json", '{"a.b": 1}')

    def test_markdown_wraps_content(self) -> None:
        payload = parse_dataset_payload("markdown", "# Title")
        assert payload == MarkdownPayload("# Title")
        assert payload.to_record() == {"content": "# Title"}

    def test_markdown_requires_text(self) -> None:
        with pytest.raises(ValidationException):
            parse_dataset_payload("markdown", {"content": "x"})


class TestPayloadFromRecord:
    def test_markdown(self) -> None:
        assert payload_from_record("markdown", {"content": "hi"}) == MarkdownPayload("hi")

    def test_markdown_missing_content(self) -> None:
        assert payload_from_record(DatasetFormat.MARKDOWN, None) == MarkdownPayload("")

    def test_json(self) -> None:
        assert payload_from_record("json", {"a": 1}) == JsonPayload({"a": 1})


class TestWorkflowSources:
    def test_extracts_in_first_occurrence_order(self) -> None:
        content = "{{wd_sales.total}} and {{wd_users.count}} then {{wd_sales.avg}}"
        assert extract_workflow_sources(content) == ["wd_sales", "wd_users"]

    def test_ignores_non_matching(self) -> None:
        assert extract_workflow_sources("{{ wd_x.y }} {{wd-x.y}} {{other.y}}") == []

    def test_empty(self) -> None:
        assert extract_workflow_sources("") == []


class TestRoundTrip:
    @pytest.mark.parametrize(
        "value",
        [None, {}, [], {"a": None}, {"a": {"b": []}}, [1, {}], {"0": "x", "1": "y"}],
    )
    def test_rejects_shapes_the_database_rewrites(self, value) -> None:
        with pytest.raises(ValidationException):
            validate_round_trip(value, "data")

    def test_accepts_nested_values(self) -> None:
        validate_round_trip({"rows": [{"id": 1, "tags": ["a"]}], "0a": False}, "data")

    def test_mixed_keys_allowed(self) -> None:
        validate_round_trip({"0": "x", "name": "y"}, "data")
