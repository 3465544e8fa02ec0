"""Shared telemetry: logging setup."""

from pindown.shared.telemetry.logging import setup_logging

__all__ = ["setup_logging"]
