"""LinkedIn job search connector (24h feed).

Docs: https://rapidapi.com/ (linkedin-job-search-api)
"""

from __future__ import annotations

from typing import Any, Dict

from ..models import JobRecord
from ..normalize import joined, or_empty
from ..utils import Clock, days_ago, local_today
from .base import SourceDescriptor

NAME = "LinkedInJobs"
ENDPOINT = "https://linkedin-job-search-api.p.rapidapi.com/active-jb-24h"


def normalize(job: Dict[str, Any]) -> JobRecord:
    return JobRecord(
        id=job.get("id"),
        title=job.get("title"),
        organization=job.get("organization"),
        location=joined(job.get("locations_derived")),
        url=job.get("url"),
        description=job.get("description_text"),
        date_posted=job.get("date_posted"),
        employment_type=joined(job.get("employment_type")),
        salary=or_empty(job.get("salary")),
        category=or_empty(job.get("category")),
        remote_onsite=or_empty(job.get("remote_onsite")),
        contact_email=or_empty(job.get("contact_email")),
        source=NAME,
    )


def build(clock: Clock = local_today) -> SourceDescriptor:
    # date_filter is fixed when the registry is built.
    params = {
        "limit": "50",
        "offset": "0",
        "title_filter": '"Software"',
        "location_filter": '"India"',
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
