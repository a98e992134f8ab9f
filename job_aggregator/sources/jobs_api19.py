"""JobsAPI19 connector.

Docs: https://rapidapi.com/ (jobs-api19)

The endpoint has no date parameter, so we ask for a larger page and keep only
postings from today or yesterday on our side.
"""

from __future__ import annotations

from typing import Any, Dict

from ..models import JobRecord
from ..normalize import make_recent_filter, or_empty
from ..utils import Clock, local_today
from .base import SourceDescriptor

NAME = "JobsAPI19"
ENDPOINT = "https://jobs-api19.p.rapidapi.com/jobs"
DEFAULT_PARAMS = {"limit": "50"}


def normalize(job: Dict[str, Any]) -> JobRecord:
    return JobRecord(
        id=job.get("id"),
        title=job.get("title"),
        organization=job.get("company"),
        location=job.get("location"),
        url=job.get("apply_link"),
        description=or_empty(job.get("job_description")),
        date_posted=job.get("posted_date"),
        employment_type=or_empty(job.get("job_type")),
        salary=or_empty(job.get("salary")),
        category=or_empty(job.get("category")),
        remote_onsite=or_empty(job.get("remote_onsite")),
        contact_email=or_empty(job.get("contact_email")),
        source=NAME,
    )


def build(clock: Clock = local_today) -> SourceDescriptor:
    return SourceDescriptor(
        name=NAME,
        method="GET",
        endpoint=ENDPOINT,
        params=dict(DEFAULT_PARAMS),
        normalize=normalize,
        filter=make_recent_filter("posted_date", clock=clock),
    )
