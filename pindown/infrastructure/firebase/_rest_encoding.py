"""Encode Python values to Realtime Database REST JSON.

A server timestamp is written as a placeholder object that the database
replaces with its own clock in epoch milliseconds.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pindown.shared.utils.datetime import to_timestamp_ms

SERVER_TIMESTAMP: dict[str, str] = {".sv": "timestamp"}


def encode_value(v: Any) -> Any:
    """Convert a Python value into something json.dumps accepts for the store."""
    if v is None or isinstance(v, (bool, int, float, str)):
        return v
    if isinstance(v, Enum):
        return v.value
    if isinstance(v, datetime):
        return to_timestamp_ms(v)
    if isinstance(v, (list, tuple)):
        return [encode_value(x) for x in v]
    if isinstance(v, dict):
        return {str(k): encode_value(x) for k, x in v.items()}
    raise TypeError(f"Unsupported Realtime Database value type: {type(v)}")
