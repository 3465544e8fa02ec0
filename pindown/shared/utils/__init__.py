"""Shared utilities: datetime and id generators."""

from pindown.shared.utils.datetime import (
    to_timestamp_ms,
    utc_now,
)
from pindown.shared.utils.generators import (
    PushIdGenerator,
    generate_cuid,
    generate_push_id,
)
from pindown.shared.utils.records import decode_list, decode_map, dedupe

__all__ = [
    "generate_cuid",
    "generate_push_id",
    "PushIdGenerator",
    "utc_now",
    "to_timestamp_ms",
    "decode_list",
    "decode_map",
    "dedupe",
]
