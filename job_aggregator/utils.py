"""Utility helpers shared across the package."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Callable, Optional
from urllib.parse import urlsplit

Clock = Callable[[], date]


def local_today() -> date:
    """Today's date in the process' local clock."""
    return datetime.now().date()


def days_ago(days: int, today: Optional[date] = None) -> str:
    """Return the date `days` before today as YYYY-MM-DD."""
    base = today or local_today()
    return (base - timedelta(days=days)).isoformat()


def host_of(url: str) -> str:
    """Network location of a URL (host[:port])."""
    return urlsplit(url).netloc
