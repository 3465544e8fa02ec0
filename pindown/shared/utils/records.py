"""Helpers for reading loosely-shaped stored records.

The Realtime Database returns arrays as objects keyed by index (or lists
with holes) and prunes empty containers, so readers normalize on the way in.
"""

from typing import Any


def decode_list(raw: Any) -> list:
    """Normalize a stored array.

    None becomes []; a dict with numeric keys becomes a list ordered by key;
    a list has its None holes dropped. Any other scalar is wrapped.
    """
    if raw is None:
        return []
    if isinstance(raw, list):
        return [x for x in raw if x is not None]
    if isinstance(raw, dict):
        try:
            items = sorted(raw.items(), key=lambda kv: int(kv[0]))
        except ValueError:
            items = list(raw.items())
        return [v for _, v in items if v is not None]
    return [raw]


def decode_map(raw: Any) -> dict:
    """Normalize a stored object: None or non-dict becomes {}."""
    if isinstance(raw, dict):
        return raw
    return {}


def dedupe(items: list) -> list:
    """Drop repeated items, keeping first occurrences in order."""
    seen: set = set()
    out = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out
