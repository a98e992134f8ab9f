"""Concurrent fan-out over the registry and merge of the results."""

from __future__ import annotations

import asyncio
from typing import List, Optional, Sequence

import httpx
from loguru import logger

from .errors import ConfigurationError
from .invoker import invoke
from .keys import KEY_POLICIES, CredentialPool, KeyPolicy, credential_label
from .models import Aggregation, InvocationResult, JobRecord
from .sources.base import SourceDescriptor


class Aggregator:
    """Runs every source of a registry concurrently and merges their records.

    Args:
        registry: Source descriptors, in output order.
        pool: Credential pool shared by all requests of the process.
        key_policy: "per_request" draws one key for the whole fan-out,
            "per_source" draws a fresh key for each source call.
        timeout_s: Outbound request timeout.
        transport: Optional httpx transport (tests plug a MockTransport here).
    """

    def __init__(
        self,
        registry: Sequence[SourceDescriptor],
        pool: CredentialPool,
        key_policy: KeyPolicy = "per_request",
        timeout_s: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if key_policy not in KEY_POLICIES:
            raise ConfigurationError(f"Unknown key policy {key_policy!r}")
        self.registry = list(registry)
        self.pool = pool
        self.key_policy: KeyPolicy = key_policy
        self._timeout = timeout_s
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, follow_redirects=True, transport=self._transport)

    async def aggregate(self, registry: Optional[Sequence[SourceDescriptor]] = None) -> Aggregation:
        """Fetch every source and return the merged records.

        Never fails because of a source: failed invocations contribute an
        empty list. Only an empty key pool aborts, before any call is made.
        """
        sources = list(registry) if registry is not None else self.registry

        if self.key_policy == "per_request":
            key = self.pool.next_key()
            keys = [key] * len(sources)
        else:
            keys = [self.pool.next_key() for _ in sources]

        async with self._client() as client:
            outcomes = await asyncio.gather(
                *(invoke(client, d, k) for d, k in zip(sources, keys)),
                return_exceptions=True,
            )

        results: List[InvocationResult] = []
        for descriptor, outcome in zip(sources, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                logger.opt(exception=outcome).error("Unexpected failure in {}", descriptor.name)
                outcome = InvocationResult.failure(descriptor.name, str(outcome) or type(outcome).__name__)
            results.append(outcome)

        records: List[JobRecord] = []
        for result in results:
            records.extend(result.data)

        used = list(dict.fromkeys(keys))
        logger.info(
            "Aggregated {} jobs from {} sources ({} failed) using key {}",
            len(records),
            len(results),
            sum(1 for r in results if not r.ok),
            credential_label(used),
        )
        return Aggregation(records=records, credentials=used, results=results)

    def aggregate_sync(self, registry: Optional[Sequence[SourceDescriptor]] = None) -> Aggregation:
        return asyncio.run(self.aggregate(registry))
