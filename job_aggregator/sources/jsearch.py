"""JSearch connector.

Docs: https://rapidapi.com/letscrape-6bRBa3QguO5/api/jsearch

JSearch filters server-side (`date_posted=today`), so no local filter is set.
"""

from __future__ import annotations

from typing import Any, Dict

from ..models import JobRecord
from ..normalize import joined, or_empty
from ..utils import Clock, local_today
from .base import SourceDescriptor

NAME = "JSearchJobs"
SOURCE_LABEL = "JSearch"
ENDPOINT = "https://jsearch.p.rapidapi.com/search"
DEFAULT_PARAMS = {
    "query": "software",
    "page": "1",
    "num_pages": "1",
    "country": "in",
    "date_posted": "today",
    "job_requirements": "no_experience",
}


def normalize(job: Dict[str, Any]) -> JobRecord:
    # Records are tagged "JSearch" while the descriptor is named "JSearchJobs".
    return JobRecord(
        id=job.get("job_id"),
        title=job.get("job_title"),
        organization=job.get("employer_name"),
        location=job.get("job_location"),
        url=job.get("job_apply_link"),
        description=job.get("job_description"),
        date_posted=job.get("job_posted_at_datetime_utc"),
        employment_type=joined(job.get("job_employment_types")),
        salary=or_empty(job.get("salary")),
        category=or_empty(job.get("category")),
        remote_onsite=or_empty(job.get("remote_onsite")),
        contact_email=or_empty(job.get("contact_email")),
        source=SOURCE_LABEL,
    )


def build(clock: Clock = local_today) -> SourceDescriptor:
    return SourceDescriptor(
        name=NAME,
        method="GET",
        endpoint=ENDPOINT,
        params=dict(DEFAULT_PARAMS),
        normalize=normalize,
    )
