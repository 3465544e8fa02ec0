"""Shared utilities: telemetry and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from pindown.shared.utils import (
    generate_cuid,
    generate_push_id,
    utc_now,
)

__all__ = [
    "generate_cuid",
    "generate_push_id",
    "utc_now",
]
