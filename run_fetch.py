"""CLI entry point.

This script runs one aggregation over the enabled sources and writes the
combined workbook to disk, without starting the HTTP server.

Examples:
    python run_fetch.py
    python run_fetch.py --out jobs.xlsx --sources JobsAPI19,JSearchJobs
    python run_fetch.py --out jobs.xlsx --json jobs.json

The optional JSON output is a list of dicts (serialized Pydantic models).
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from job_aggregator.config import load_settings
from job_aggregator.export import export_filename, format_workbook
from job_aggregator.keys import credential_label
from job_aggregator.logger import setup_logger
from job_aggregator.server import build_aggregator
from job_aggregator.sources import build_registry


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fetch jobs from all sources and export them as .xlsx.")
    p.add_argument("--out", type=str, default=None, help="Output .xlsx path (default: <today>.xlsx).")
    p.add_argument("--sources", type=str, default=None, help="Comma separated source names (default: ENABLED_SOURCES).")
    p.add_argument("--json", type=str, default=None, help="Also write the merged records as JSON to this path.")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    settings = load_settings()
    setup_logger(settings.log_level, settings.log_file)

    aggregator = build_aggregator(settings)
    registry = None
    if args.sources:
        registry = build_registry([s for s in args.sources.split(",") if s.strip()])

    result = aggregator.aggregate_sync(registry)
    credential = credential_label(result.credentials, expose=settings.expose_credential)
    payload = format_workbook(result.records, credential, results=result.results)

    out_path = Path(args.out or export_filename()).expanduser().resolve()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(payload)
    print(f"Wrote {len(result.records)} jobs to: {out_path}")

    if result.failed_sources:
        print(f"Sources with errors: {', '.join(result.failed_sources)}")

    if args.json:
        json_path = Path(args.json).expanduser().resolve()
        json_path.parent.mkdir(parents=True, exist_ok=True)
        data = [r.model_dump(mode="json") for r in result.records]
        json_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        print(f"Wrote JSON to: {json_path}")


if __name__ == "__main__":
    main()
