"""Calls one source and turns its answer into normalized records.

A failing source must never take the batch down with it: every error is
caught here, logged, and returned as a failed `InvocationResult`.
"""

from __future__ import annotations

from typing import Any, Dict, List

import httpx
from loguru import logger

from .errors import SourceInvocationError
from .models import InvocationResult, JobRecord
from .sources.base import SourceDescriptor

API_KEY_HEADER = "x-rapidapi-key"
API_HOST_HEADER = "x-rapidapi-host"


def build_headers(descriptor: SourceDescriptor, credential: str) -> Dict[str, str]:
    headers = {
        API_KEY_HEADER: credential,
        API_HOST_HEADER: descriptor.host,
    }
    if descriptor.method == "POST":
        headers["Content-Type"] = "application/json"
    return headers


async def _send(client: httpx.AsyncClient, descriptor: SourceDescriptor, credential: str) -> Any:
    headers = build_headers(descriptor, credential)
    try:
        if descriptor.method == "POST":
            resp = await client.post(descriptor.endpoint, json=descriptor.body or {}, headers=headers)
        else:
            resp = await client.get(descriptor.endpoint, params=descriptor.params, headers=headers)
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SourceInvocationError(
            descriptor.name, f"HTTP {exc.response.status_code} from {descriptor.endpoint}"
        ) from exc
    except httpx.HTTPError as exc:
        raise SourceInvocationError(descriptor.name, f"{type(exc).__name__}: {exc}") from exc

    try:
        return resp.json()
    except ValueError as exc:
        raise SourceInvocationError(descriptor.name, f"Malformed JSON body: {exc}") from exc


def _to_records(descriptor: SourceDescriptor, body: Any) -> List[JobRecord]:
    items = descriptor.raw_items(body)
    if descriptor.filter is not None:
        before = len(items)
        items = descriptor.filter(items)
        logger.debug("{}: filter kept {}/{} items", descriptor.name, len(items), before)

    records: List[JobRecord] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        try:
            records.append(descriptor.normalize(item))
        except (ValueError, TypeError, AttributeError, KeyError) as exc:
            raise SourceInvocationError(descriptor.name, f"Could not normalize item: {exc}") from exc
    return records


async def invoke(client: httpx.AsyncClient, descriptor: SourceDescriptor, credential: str) -> InvocationResult:
    """Fetch, extract, filter and normalize one source."""
    try:
        body = await _send(client, descriptor, credential)
        records = _to_records(descriptor, body)
    except SourceInvocationError as exc:
        logger.error("Error calling {}: {}", descriptor.name, exc.message)
        return InvocationResult.failure(descriptor.name, exc.message)

    logger.info("{}: {} jobs", descriptor.name, len(records))
    return InvocationResult.success(descriptor.name, records)
