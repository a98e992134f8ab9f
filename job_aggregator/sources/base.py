"""Source descriptors: how to call one upstream API and read its answer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Literal, Optional

from ..models import JobRecord
from ..normalize import ItemFilter
from ..utils import host_of

HttpMethod = Literal["GET", "POST"]
Normalizer = Callable[[Dict[str, Any]], JobRecord]
Extractor = Callable[[Any], Any]


def extract_data_envelope(body: Any) -> Any:
    """Read `data` when present, else fall back to the whole body."""
    if isinstance(body, dict) and body.get("data"):
        return body["data"]
    return body or []


def extract_jobs_envelope(body: Any) -> Any:
    """Read the `jobs` field used by the legacy search API."""
    if isinstance(body, dict):
        return body.get("jobs") or []
    return []


@dataclass(frozen=True)
class SourceDescriptor:
    """Immutable description of one upstream job listing API."""

    name: str
    method: HttpMethod
    endpoint: str
    normalize: Normalizer
    params: Dict[str, Any] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None
    extract: Extractor = extract_data_envelope
    filter: Optional[ItemFilter] = None

    def __post_init__(self) -> None:
        if self.method not in ("GET", "POST"):
            raise ValueError(f"Unsupported method for {self.name}: {self.method!r}")

    @property
    def host(self) -> str:
        return host_of(self.endpoint)

    def raw_items(self, body: Any) -> List[Any]:
        """Envelope extraction; anything that is not a list reads as empty."""
        items = self.extract(body)
        return items if isinstance(items, list) else []
