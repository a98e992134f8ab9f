"""Shared fixtures: fake upstream APIs and canned payloads."""

from datetime import date
from typing import Callable, Dict, List

import httpx
import pytest

from job_aggregator.models import JobRecord
from job_aggregator.sources.base import SourceDescriptor

TODAY = date(2024, 1, 2)


def fixed_clock(day: date = TODAY) -> Callable[[], date]:
    return lambda: day


def route_by_host(routes: Dict[str, Callable], seen: List[httpx.Request] = None) -> httpx.MockTransport:
    """MockTransport dispatching on request host; unknown hosts answer 404."""

    def handler(request: httpx.Request):
        if seen is not None:
            seen.append(request)
        route = routes.get(request.url.host)
        if route is None:
            return httpx.Response(404, json={"message": "no route"})
        return route(request)

    return httpx.MockTransport(handler)


def simple_source(name: str, host: str = None, **kwargs) -> SourceDescriptor:
    """A GET source whose normalizer tags records with `name`."""
    return SourceDescriptor(
        name=name,
        method=kwargs.pop("method", "GET"),
        endpoint=f"https://{host or name.lower() + '.example.com'}/jobs",
        normalize=lambda item: JobRecord(id=item.get("id"), title=item.get("title"), source=name),
        **kwargs,
    )


@pytest.fixture
def jobs_api19_items():
    """Three postings; two fall on 2024-01-02 or the day before."""
    return [
        {
            "id": 101,
            "title": "Backend Engineer",
            "company": "Acme",
            "location": "Pune",
            "apply_link": "https://acme.example.com/apply/101",
            "job_description": "Build APIs",
            "posted_date": "2024-01-02T10:00:00Z",
            "job_type": "Full-time",
        },
        {
            "id": 102,
            "title": "Frontend Engineer",
            "company": "Acme",
            "location": "Remote",
            "apply_link": "https://acme.example.com/apply/102",
            "posted_date": "2024-01-01T23:59:00Z",
        },
        {
            "id": 103,
            "title": "Data Engineer",
            "company": "Globex",
            "location": "Bengaluru",
            "apply_link": "https://globex.example.com/apply/103",
            "posted_date": "2023-12-20T08:00:00Z",
        },
    ]
