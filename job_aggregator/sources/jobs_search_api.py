"""Jobs Search API connector (POST, scrapes several boards at once).

Docs: https://rapidapi.com/ (jobs-search-api)

This is the one source that wraps its list in `jobs` instead of `data`, and
the one that takes a JSON body instead of query parameters. Disabled by
default; enable it through ENABLED_SOURCES.
"""

from __future__ import annotations

from typing import Any, Dict

from ..models import JobRecord
from ..normalize import joined, or_empty
from ..utils import Clock, local_today
from .base import SourceDescriptor, extract_jobs_envelope

NAME = "JobsSearchAPI"
ENDPOINT = "https://jobs-search-api.p.rapidapi.com/getjobs"
DEFAULT_BODY: Dict[str, Any] = {
    "search_term": "software",
    "location": "india",
    "results_wanted": 50,
    "site_name": ["indeed", "linkedin", "zip_recruiter", "glassdoor"],
    "distance": 10000,
    "job_type": "fulltime",
    "is_remote": False,
    "linkedin_fetch_description": False,
    "hours_old": 24,
}


def _remote_or_onsite(value: Any) -> str:
    # The API sends the flag as the string "True"/"False".
    if value is True or str(value) == "True":
        return "Remote"
    return "Onsite"


def normalize(job: Dict[str, Any]) -> JobRecord:
    return JobRecord(
        id=job.get("id"),
        title=job.get("title"),
        organization=job.get("company"),
        location=job.get("location"),
        url=job.get("job_url"),
        description=or_empty(job.get("description")),
        date_posted=job.get("date_posted"),
        employment_type=or_empty(job.get("job_type")),
        salary=or_empty(job.get("salary_source")),
        category=or_empty(job.get("job_function")),
        remote_onsite=_remote_or_onsite(job.get("is_remote")),
        contact_email=joined(job.get("emails")) or "N/A",
        source=job.get("site") or NAME,
    )


def build(clock: Clock = local_today) -> SourceDescriptor:
    return SourceDescriptor(
        name=NAME,
        method="POST",
        endpoint=ENDPOINT,
        body=dict(DEFAULT_BODY),
        normalize=normalize,
        extract=extract_jobs_envelope,
    )
