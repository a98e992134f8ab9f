"""Unit tests for the spreadsheet export."""

import io
import zipfile
from datetime import datetime, timezone

import pytest
from openpyxl import load_workbook

from job_aggregator.errors import FormattingError
from job_aggregator.export import HEADERS, build_rows, export_filename, format_workbook
from job_aggregator.models import InvocationResult, JobRecord

GENERATED_AT = datetime(2024, 1, 2, 12, 0, 0, tzinfo=timezone.utc)


def sample_records():
    return [
        JobRecord(
            id="1",
            title="Backend Engineer",
            organization="Acme",
            location="Pune",
            url="https://acme.example.com/1",
            description="Build APIs",
            date_posted="2024-01-02T10:00:00Z",
            employment_type="Full-time",
            salary="20 LPA",
            category="Engineering",
            remote_onsite="Remote",
            contact_email="hr@acme.example.com",
            source="JobsAPI19",
        ),
        JobRecord(id="2", title="Tester", source="JSearch"),
    ]


def load(payload):
    return load_workbook(io.BytesIO(payload))


@pytest.mark.unit
def test_headers_are_fixed():
    assert HEADERS == [
        "Job Title",
        "Company Name",
        "Location",
        "Job Type",
        "Experience Required",
        "Salary",
        "Posted Date",
        "Apply Link",
        "Job Description",
        "Job ID",
        "Category",
        "Remote/Onsite",
        "Contact Email",
        "Source",
    ]


@pytest.mark.unit
def test_fallbacks_for_empty_fields():
    record = JobRecord(employment_type="", salary="", category="", remote_onsite="", contact_email="", source="A")
    row = dict(zip(HEADERS, build_rows([record])[0]))

    assert row["Experience Required"] == "Not specified"
    assert row["Salary"] == "Not specified"
    assert row["Category"] == "Software"
    assert row["Remote/Onsite"] == "Not specified"
    assert row["Contact Email"] == "N/A"
    assert row["Source"] == "A"


@pytest.mark.unit
def test_experience_required_copies_employment_type():
    row = dict(zip(HEADERS, build_rows([sample_records()[0]])[0]))
    assert row["Job Type"] == "Full-time"
    assert row["Experience Required"] == "Full-time"


@pytest.mark.unit
def test_dict_records_are_accepted_and_source_defaults():
    row = dict(zip(HEADERS, build_rows([{"title": "Dev"}])[0]))
    assert row["Job Title"] == "Dev"
    assert row["Source"] == "Unknown"


@pytest.mark.unit
def test_workbook_contents():
    payload = format_workbook(sample_records(), "****3456", generated_at=GENERATED_AT)
    wb = load(payload)

    jobs = wb["Jobs"]
    rows = list(jobs.iter_rows(values_only=True))
    assert list(rows[0]) == HEADERS
    assert len(rows) == 3
    assert rows[1][0] == "Backend Engineer"
    assert rows[2][HEADERS.index("Category")] == "Software"
    assert rows[2][HEADERS.index("Source")] == "JSearch"
    assert jobs.column_dimensions["H"].width == 50

    meta = wb["Metadata"]
    assert meta["A2"].value == "Credential Used"
    assert meta["B2"].value == "****3456"
    assert meta["A3"].value == "Generated At"
    assert meta["B3"].value == "2024-01-02T12:00:00+00:00"
    assert meta["B4"].value == 2


@pytest.mark.unit
def test_metadata_lists_per_source_results():
    results = [
        InvocationResult.success("JobsAPI19", sample_records()[:1]),
        InvocationResult.failure("JSearchJobs", "HTTP 429 from https://jsearch.p.rapidapi.com/search"),
    ]
    wb = load(format_workbook(sample_records()[:1], "k", generated_at=GENERATED_AT, results=results))
    meta = wb["Metadata"]

    assert [c.value for c in meta[6]] == ["Source", "Jobs", "Error"]
    assert meta["A7"].value == "JobsAPI19"
    assert meta["B7"].value == 1
    assert meta["A8"].value == "JSearchJobs"
    assert "429" in meta["C8"].value


@pytest.mark.unit
def test_empty_records_still_produce_a_workbook():
    wb = load(format_workbook([], "k", generated_at=GENERATED_AT))
    rows = list(wb["Jobs"].iter_rows(values_only=True))
    assert rows == [tuple(HEADERS)]


@pytest.mark.unit
def test_illegal_characters_are_stripped():
    record = JobRecord(title="Dev\x00ops\x0b", description="line\x1fbreak", source="A")
    wb = load(format_workbook([record], "k", generated_at=GENERATED_AT))
    assert wb["Jobs"]["A2"].value == "Devops"
    assert wb["Jobs"]["I2"].value == "linebreak"


@pytest.mark.unit
def test_leading_equals_sign_is_written_as_text():
    """Upstream text that looks like a formula stays plain text."""
    title = '=HYPERLINK("http://evil.example","Apply")'
    record = JobRecord(title=title, description="== About us ==", source="A")
    wb = load(format_workbook([record], "=k", generated_at=GENERATED_AT))

    jobs = wb["Jobs"]
    assert jobs["A2"].data_type == "s"
    assert jobs["A2"].value == title
    assert jobs["I2"].data_type == "s"
    assert jobs["I2"].value == "== About us =="
    assert wb["Metadata"]["B2"].data_type == "s"
    assert wb["Metadata"]["B2"].value == "=k"


@pytest.mark.unit
def test_same_input_gives_identical_sheets():
    records = sample_records()
    first = format_workbook(records, "k", generated_at=GENERATED_AT)
    second = format_workbook(records, "k", generated_at=GENERATED_AT)

    with zipfile.ZipFile(io.BytesIO(first)) as a, zipfile.ZipFile(io.BytesIO(second)) as b:
        for name in ("xl/worksheets/sheet1.xml", "xl/worksheets/sheet2.xml"):
            assert a.read(name) == b.read(name)


@pytest.mark.unit
def test_jobs_sheet_ignores_generation_time():
    records = sample_records()
    first = format_workbook(records, "k", generated_at=GENERATED_AT)
    later = format_workbook(records, "k", generated_at=datetime(2024, 1, 3, tzinfo=timezone.utc))

    assert list(load(first)["Jobs"].values) == list(load(later)["Jobs"].values)


@pytest.mark.unit
def test_malformed_record_raises_formatting_error():
    with pytest.raises(FormattingError):
        format_workbook([object()], "k", generated_at=GENERATED_AT)


@pytest.mark.unit
def test_export_filename():
    assert export_filename(datetime(2024, 1, 2, 23, 0)) == "2024-01-02.xlsx"
