"""Active Jobs DB connector (ATS postings from the last 24h).

Docs: https://rapidapi.com/fantastic-jobs-fantastic-jobs-default/api/active-jobs-db

Shares its response shape with the LinkedIn feed from the same vendor.
Disabled by default; enable it through ENABLED_SOURCES.
"""

from __future__ import annotations

from typing import Any, Dict

from ..models import JobRecord
from ..utils import Clock, days_ago, local_today
from .base import SourceDescriptor
from .linkedin_jobs import normalize as _linkedin_normalize

NAME = "ActiveJobsDB"
ENDPOINT = "https://active-jobs-db.p.rapidapi.com/active-ats-24h"


def normalize(job: Dict[str, Any]) -> JobRecord:
    record = _linkedin_normalize(job)
    return record.model_copy(update={"source": NAME})


def build(clock: Clock = local_today) -> SourceDescriptor:
    params = {
        "limit": "50",
        "offset": "0",
        "title_filter": '"Software"',
        "advanced_title_filter": "Software Developer | Software Engineer | Web Developer | App Developer",
        "location_filter": '"India"',
        "description_type": "text",
        "date_filter": days_ago(1, clock()),
        "ai_experience_level_filter": "0-2",
    }
    return SourceDescriptor(
        name=NAME,
        method="GET",
        endpoint=ENDPOINT,
        params=params,
        normalize=normalize,
    )
