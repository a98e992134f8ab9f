"""Registry of known sources and the default selection."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence

from ..errors import ConfigurationError
from ..utils import Clock, local_today
from . import active_jobs_db, jobs_api19, jobs_search_api, jsearch, linkedin_jobs
from .base import SourceDescriptor

SourceBuilder = Callable[[Clock], SourceDescriptor]

SOURCES: Dict[str, SourceBuilder] = {
    jobs_api19.NAME: jobs_api19.build,
    jsearch.NAME: jsearch.build,
    linkedin_jobs.NAME: linkedin_jobs.build,
    active_jobs_db.NAME: active_jobs_db.build,
    jobs_search_api.NAME: jobs_search_api.build,
}

DEFAULT_SOURCES: List[str] = [jobs_api19.NAME, jsearch.NAME, linkedin_jobs.NAME]


def _lookup(name: str) -> SourceBuilder:
    wanted = name.strip().lower()
    for key, builder in SOURCES.items():
        if key.lower() == wanted:
            return builder
    raise ConfigurationError(f"Unknown source {name!r}; known sources: {', '.join(SOURCES)}")


def build_registry(
    enabled_sources: Optional[Sequence[str]] = None,
    clock: Clock = local_today,
) -> List[SourceDescriptor]:
    """Build descriptors for the enabled sources, in the order given.

    Names are matched case-insensitively and duplicates are dropped, so the
    resulting registry always has unique names.
    """
    names = [n for n in (enabled_sources or DEFAULT_SOURCES) if n and n.strip()]
    registry: List[SourceDescriptor] = []
    seen = set()
    for name in names:
        descriptor = _lookup(name)(clock)
        if descriptor.name in seen:
            continue
        seen.add(descriptor.name)
        registry.append(descriptor)
    if not registry:
        raise ConfigurationError("No sources enabled")
    return registry
