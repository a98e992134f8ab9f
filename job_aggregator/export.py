"""Spreadsheet export of the merged job records.

The workbook has two sheets:
- `Jobs`: one row per record with a fixed column schema.
- `Metadata`: which credential served the request, when the file was
  generated, and per-source counts when the invocation results are given.

Everything is written to an in-memory buffer; nothing touches the disk.
"""

from __future__ import annotations

import io
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils import get_column_letter

from .errors import FormattingError
from .models import UNKNOWN_SOURCE, InvocationResult, JobRecord

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

JOBS_SHEET = "Jobs"
METADATA_SHEET = "Metadata"

# (header, record field or synthesized key, column width)
COLUMNS: List[Tuple[str, str, int]] = [
    ("Job Title", "title", 30),
    ("Company Name", "organization", 25),
    ("Location", "location", 25),
    ("Job Type", "employment_type", 20),
    ("Experience Required", "experience_required", 20),
    ("Salary", "salary", 20),
    ("Posted Date", "date_posted", 20),
    ("Apply Link", "url", 50),
    ("Job Description", "description", 50),
    ("Job ID", "id", 20),
    ("Category", "category", 20),
    ("Remote/Onsite", "remote_onsite", 15),
    ("Contact Email", "contact_email", 25),
    ("Source", "source", 20),
]

HEADERS = [header for header, _, _ in COLUMNS]


def extract_extra_fields(record: JobRecord) -> Dict[str, str]:
    """Fallback values for fields sources often leave empty."""
    return {
        "experience_required": record.employment_type or "Not specified",
        "salary": record.salary or "Not specified",
        "category": record.category or "Software",
        "remote_onsite": record.remote_onsite or "Not specified",
        "contact_email": record.contact_email or "N/A",
        "source": record.source or UNKNOWN_SOURCE,
    }


def _clean(value: Any) -> Any:
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


def _as_record(item: Any) -> JobRecord:
    if isinstance(item, JobRecord):
        return item
    if isinstance(item, dict):
        return JobRecord.model_validate(item)
    raise TypeError(f"Cannot export {type(item).__name__} as a job record")


def build_rows(records: Iterable[Any]) -> List[List[Any]]:
    """Rows of the Jobs sheet, in column order."""
    rows: List[List[Any]] = []
    for item in records:
        record = _as_record(item)
        values = {**record.model_dump(), **extract_extra_fields(record)}
        rows.append([_clean(values.get(key)) for _, key, _ in COLUMNS])
    return rows


def _metadata_frames(
    credential_used: str,
    generated_at: datetime,
    total: int,
    results: Optional[Sequence[InvocationResult]],
) -> Tuple[pd.DataFrame, Optional[pd.DataFrame]]:
    summary = pd.DataFrame(
        [
            ["Credential Used", credential_used],
            ["Generated At", generated_at.isoformat()],
            ["Total Jobs", total],
        ],
        columns=["Field", "Value"],
    )
    if results is None:
        return summary, None
    per_source = pd.DataFrame(
        [[r.source, len(r.data), _clean(r.error or "")] for r in results],
        columns=["Source", "Jobs", "Error"],
    )
    return summary, per_source


def format_workbook(
    records: Sequence[Any],
    credential_used: str,
    generated_at: Optional[datetime] = None,
    results: Optional[Sequence[InvocationResult]] = None,
) -> bytes:
    """Serialize records to an .xlsx workbook and return its bytes.

    Raises:
        FormattingError: a record could not be read or the workbook could
            not be written.
    """
    generated_at = generated_at or datetime.now(timezone.utc).replace(microsecond=0)
    buffer = io.BytesIO()
    try:
        rows = build_rows(records)
        jobs = pd.DataFrame(rows, columns=HEADERS)
        summary, per_source = _metadata_frames(_clean(credential_used or ""), generated_at, len(rows), results)

        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            jobs.to_excel(writer, sheet_name=JOBS_SHEET, index=False)
            summary.to_excel(writer, sheet_name=METADATA_SHEET, index=False)
            if per_source is not None:
                per_source.to_excel(writer, sheet_name=METADATA_SHEET, index=False, startrow=len(summary) + 2)

            sheet = writer.sheets[JOBS_SHEET]
            for idx, (_, _, width) in enumerate(COLUMNS, start=1):
                sheet.column_dimensions[get_column_letter(idx)].width = width
            meta = writer.sheets[METADATA_SHEET]
            meta.column_dimensions["A"].width = 20
            meta.column_dimensions["B"].width = 40
            meta.column_dimensions["C"].width = 50

            # openpyxl stores any string starting with "=" as a formula
            for worksheet in writer.sheets.values():
                for row in worksheet.iter_rows():
                    for cell in row:
                        if isinstance(cell.value, str) and cell.data_type == "f":
                            cell.data_type = "s"
    except Exception as exc:
        raise FormattingError(f"Could not build spreadsheet: {exc}") from exc

    return buffer.getvalue()


def export_filename(today: Optional[datetime] = None) -> str:
    """Attachment name, e.g. 2024-01-02.xlsx."""
    return f"{(today or datetime.now()).date().isoformat()}.xlsx"
