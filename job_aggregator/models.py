"""Data models for the aggregation pipeline.

Every upstream source speaks its own dialect; the rest of the system only ever
sees `JobRecord`. Upstream payloads are loose (numbers where strings are
expected, lists for multi-valued fields), so the record coerces on the way in
instead of trusting each normalizer to do it.

This file uses Pydantic v2.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


UNKNOWN_SOURCE = "Unknown"


class JobRecord(BaseModel):
    """A normalized job posting, shared by every source."""

    id: Optional[str] = None
    title: Optional[str] = None
    organization: Optional[str] = None
    location: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    date_posted: Optional[str] = None
    employment_type: Optional[str] = None
    salary: Optional[str] = None
    category: Optional[str] = None
    remote_onsite: Optional[str] = None
    contact_email: Optional[str] = None
    source: str = Field(default=UNKNOWN_SOURCE, description="Source identifier, never empty.")

    @field_validator(
        "id",
        "title",
        "organization",
        "location",
        "url",
        "description",
        "date_posted",
        "employment_type",
        "salary",
        "category",
        "remote_onsite",
        "contact_email",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return ", ".join(str(v) for v in value if v not in (None, ""))
        return str(value)

    @field_validator("source", mode="before")
    @classmethod
    def _source_or_unknown(cls, value: Any) -> str:
        if value is None:
            return UNKNOWN_SOURCE
        text = str(value).strip()
        return text or UNKNOWN_SOURCE


class InvocationResult(BaseModel):
    """Outcome of calling one source: either records or an error message."""

    source: str
    data: List[JobRecord] = Field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def success(cls, source: str, data: List[JobRecord]) -> "InvocationResult":
        return cls(source=source, data=data)

    @classmethod
    def failure(cls, source: str, error: str) -> "InvocationResult":
        return cls(source=source, data=[], error=error or "unknown error")

    @property
    def ok(self) -> bool:
        return self.error is None


class Aggregation(BaseModel):
    """Merged records of one request plus the credential that served it."""

    records: List[JobRecord] = Field(default_factory=list)
    credentials: List[str] = Field(default_factory=list)
    results: List[InvocationResult] = Field(default_factory=list)

    @property
    def failed_sources(self) -> List[str]:
        return [r.source for r in self.results if not r.ok]

    @property
    def credential(self) -> str:
        """The key that served the request (several under per-source rotation)."""
        return ", ".join(self.credentials)
