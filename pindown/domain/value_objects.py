"""Value objects: dataset payloads and key validation.

DatasetPayload is a tagged union: a JSON dataset stores the parsed value,
a markdown dataset stores {"content": <text>}. Parsing happens once at the
boundary so an unparseable payload never reaches the store.
"""

import json
import re
from dataclasses import dataclass
from typing import Any

from pindown.domain.enums import DatasetFormat
from pindown.domain.exceptions import ValidationException

# Realtime Database keys cannot contain these characters (or ASCII controls).
_INVALID_KEY_CHARS = re.compile(r"[.$#\[\]/\x00-\x1f\x7f]")
_MAX_KEY_BYTES = 768

_WORKFLOW_REF = re.compile(r"\{\{wd_([A-Za-z0-9_]+)\.")


def is_valid_key(key: str) -> bool:
    """Return True if key can be used as a Realtime Database path segment."""
    if not key or len(key.encode("utf-8")) > _MAX_KEY_BYTES:
        return False
    return _INVALID_KEY_CHARS.search(key) is None


def validate_keys(value: Any, field: str) -> None:
    """Raise ValidationException if any nested object key is not storable."""
    if isinstance(value, dict):
        for k, v in value.items():
            if not isinstance(k, str) or not is_valid_key(k):
                raise ValidationException(
                    f"Invalid key {k!r}: keys cannot be empty or contain . $ # [ ] /",
                    field=field,
                )
            validate_keys(v, field)
    elif isinstance(value, list):
        for item in value:
            validate_keys(item, field)


def validate_round_trip(value: Any, field: str) -> None:
    """Raise ValidationException for JSON the database would not return unchanged.

    The Realtime Database drops nulls and empty objects or arrays, and turns
    objects keyed only by array indices into arrays.
    """
    if value is None:
        raise ValidationException("Null values cannot be stored", field=field)
    if isinstance(value, dict):
        if not value:
            raise ValidationException("Empty objects cannot be stored", field=field)
        if all(isinstance(k, str) and k.isdigit() for k in value):
            raise ValidationException(
                "Objects keyed only by numbers cannot be stored; use an array",
                field=field,
            )
        for v in value.values():
            validate_round_trip(v, field)
    elif isinstance(value, list):
        if not value:
            raise ValidationException("Empty arrays cannot be stored", field=field)
        for item in value:
            validate_round_trip(item, field)


@dataclass(frozen=True)
class JsonPayload:
    """Parsed JSON dataset value."""

    value: Any

    @property
    def format(self) -> DatasetFormat:
        return DatasetFormat.JSON

    def to_record(self) -> Any:
        return self.value


@dataclass(frozen=True)
class MarkdownPayload:
    """Markdown dataset text."""

    content: str

    @property
    def format(self) -> DatasetFormat:
        return DatasetFormat.MARKDOWN

    def to_record(self) -> dict[str, str]:
        return {"content": self.content}


DatasetPayload = JsonPayload | MarkdownPayload


def parse_dataset_payload(fmt: DatasetFormat | str, raw: Any) -> DatasetPayload:
    """Parse raw request data into a DatasetPayload.

    For JSON datasets a string is parsed with json.loads; an already-structured
    value (dict/list/number) is accepted as is. For markdown the raw value
    must be a string.

    Raises:
        ValidationException: If JSON is unparseable, contains keys the store
            cannot hold or values it would not return unchanged, or markdown
            content is not text.
    """
    fmt = DatasetFormat(fmt)
    if fmt is DatasetFormat.JSON:
        if isinstance(raw, str):
            try:
                value = json.loads(raw)
            except json.JSONDecodeError as e:
                raise ValidationException(
                    f"Invalid JSON data: {e.msg}", field="data"
                ) from e
        else:
            value = raw
        validate_keys(value, "data")
        validate_round_trip(value, "data")
        return JsonPayload(value)
    if not isinstance(raw, str):
        raise ValidationException("Markdown data must be a string", field="data")
    return MarkdownPayload(raw)


def payload_from_record(fmt: DatasetFormat | str | None, data: Any) -> DatasetPayload:
    """Rebuild a payload from a stored dataset record (no re-validation)."""
    if fmt == DatasetFormat.MARKDOWN.value or fmt is DatasetFormat.MARKDOWN:
        content = data.get("content", "") if isinstance(data, dict) else ""
        return MarkdownPayload(content if isinstance(content, str) else str(content))
    return JsonPayload(data)


def extract_workflow_sources(content: str) -> list[str]:
    """Return workflow ids (wd_<name>) referenced as {{wd_<name>.…}} in pin content.

    Order follows first occurrence; duplicates are dropped.
    """
    seen: list[str] = []
    for match in _WORKFLOW_REF.finditer(content or ""):
        name = f"wd_{match.group(1)}"
        if name not in seen:
            seen.append(name)
    return seen
