"""Shared utilities: datetime and batching."""

from headless_cms.shared.utils.batching import chunked
from headless_cms.shared.utils.datetime import ensure_utc, utc_now

__all__ = [
    "chunked",
    "ensure_utc",
    "utc_now",
]
