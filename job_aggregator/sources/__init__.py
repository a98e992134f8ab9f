"""Upstream job listing sources."""

from .base import SourceDescriptor
from .registry import DEFAULT_SOURCES, SOURCES, build_registry

__all__ = ["SourceDescriptor", "DEFAULT_SOURCES", "SOURCES", "build_registry"]
