"""Exception types raised by the aggregation pipeline."""

from __future__ import annotations


class JobAggregatorError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(JobAggregatorError):
    """Settings are unusable (empty key pool, unknown source, bad policy)."""


class SourceInvocationError(JobAggregatorError):
    """A single upstream source failed; recovered by the invoker."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


class FormattingError(JobAggregatorError):
    """The spreadsheet could not be built or serialized."""
