"""Normalization helpers and record filters.

Source modules map raw payloads with these helpers so that every connector
treats missing values, multi-valued fields and posting dates the same way.
Filters operate on the raw item list, before normalization.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from .utils import Clock, local_today

RawItems = List[Dict[str, Any]]
ItemFilter = Callable[[RawItems], RawItems]


def or_empty(value: Any) -> Any:
    """Return the value, or "" when it is missing/falsy."""
    return value if value else ""


def joined(value: Any, sep: str = ", ") -> str:
    """Join a list field into one string; pass strings through."""
    if not value:
        return ""
    if isinstance(value, (list, tuple)):
        return sep.join(str(v) for v in value if v not in (None, ""))
    return str(value)


def parse_posted_date(value: Any) -> Optional[date]:
    """Date portion of an ISO-like timestamp, or None if absent/malformed."""
    if not isinstance(value, str):
        return None
    head = value.strip().split("T", 1)[0][:10]
    try:
        return date.fromisoformat(head)
    except ValueError:
        return None


def make_recent_filter(field: str = "posted_date", clock: Clock = local_today) -> ItemFilter:
    """Build a filter keeping items posted today or yesterday.

    "Today" is read from `clock` each time the filter runs, not when it is
    built, so a long-lived registry keeps filtering against the current date.
    Items whose date is missing or unparseable are dropped.
    """

    def _filter(items: RawItems) -> RawItems:
        today = clock()
        yesterday = date.fromordinal(today.toordinal() - 1)
        logger.debug("Filtering on {}: today={} yesterday={}", field, today, yesterday)
        kept: RawItems = []
        for item in items:
            if not isinstance(item, dict):
                continue
            posted = parse_posted_date(item.get(field))
            if posted is not None and posted in (today, yesterday):
                kept.append(item)
        return kept

    return _filter
