"""Shared utilities: datetime and generators."""

from firelite.shared.utils.datetime import (
    ensure_utc,
    format_rfc3339,
    parse_rfc3339,
    utc_now,
)
from firelite.shared.utils.generators import generate_auto_id

__all__ = [
    "generate_auto_id",
    "utc_now",
    "ensure_utc",
    "format_rfc3339",
    "parse_rfc3339",
]
