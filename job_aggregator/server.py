"""
HTTP surface: one download endpoint serving the combined jobs workbook.

  GET /combined-jobs  → aggregate all sources, answer an .xlsx attachment
  GET /health         → configured source and key counts
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse, Response
from loguru import logger

from .aggregator import Aggregator
from .config import Settings, load_settings
from .export import XLSX_MIME, export_filename, format_workbook
from .keys import CredentialPool, credential_label
from .sources import build_registry


def build_aggregator(settings: Settings) -> Aggregator:
    registry = build_registry(settings.enabled_sources or None)
    pool = CredentialPool.from_values(settings.api_keys)
    if not len(pool):
        logger.warning("No API keys configured; /combined-jobs will fail until keys are set")
    logger.info("Sources: {}", ", ".join(d.name for d in registry))
    return Aggregator(
        registry,
        pool,
        key_policy=settings.key_policy,
        timeout_s=settings.request_timeout_seconds,
    )


def create_app(settings: Optional[Settings] = None, aggregator: Optional[Aggregator] = None) -> FastAPI:
    settings = settings or load_settings()
    aggregator = aggregator or build_aggregator(settings)

    app = FastAPI(title="Combined Jobs", version="1.0.0")
    app.state.settings = settings
    app.state.aggregator = aggregator

    @app.get("/combined-jobs")
    async def combined_jobs():
        try:
            result = await aggregator.aggregate()
            payload = await asyncio.to_thread(
                format_workbook,
                result.records,
                credential_label(result.credentials, expose=settings.expose_credential),
                generated_at=datetime.now(timezone.utc).replace(microsecond=0),
                results=result.results,
            )
        except Exception as exc:
            logger.exception("Error generating Excel")
            return JSONResponse(
                status_code=500,
                content={
                    "success": False,
                    "message": "Failed to fetch or generate Excel file",
                    "error": str(exc),
                },
            )

        filename = export_filename()
        logger.info("Serving {} with {} jobs", filename, len(result.records))
        return Response(
            content=payload,
            media_type=XLSX_MIME,
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.get("/health")
    def health():
        return {
            "status": "ok",
            "sources": [d.name for d in aggregator.registry],
            "keys": len(aggregator.pool),
            "key_policy": aggregator.key_policy,
        }

    return app
