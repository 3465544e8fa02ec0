"""Tests for stored-record normalization helpers."""

from pindown.shared.utils.records import decode_list, decode_map, dedupe


def test_decode_list_none() -> None:
    assert decode_list(None) == []


def test_decode_list_drops_holes() -> None:
    assert decode_list(["a", None, "b"]) == ["a", "b"]


def test_decode_list_numeric_key_object() -> None:
    assert decode_list({"10": "c", "2": "b", "0": "a"}) == ["a", "b", "c"]


def test_decode_list_wraps_scalar() -> None:
    assert decode_list("solo") == ["solo"]


def test_decode_map() -> None:
    assert decode_map(None) == {}
    assert decode_map([1]) == {}
    assert decode_map({"a": 1}) == {"a": 1}


def test_dedupe_keeps_first_occurrence() -> None:
    assert dedupe(["p1", "p2", "p1", "p3", "p2"]) == ["p1", "p2", "p3"]
