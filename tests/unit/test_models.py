"""Unit tests for JobRecord coercion and result helpers."""

import pytest

from job_aggregator.models import Aggregation, InvocationResult, JobRecord


@pytest.mark.unit
def test_source_falls_back_to_unknown():
    assert JobRecord().source == "Unknown"
    assert JobRecord(source="").source == "Unknown"
    assert JobRecord(source=None).source == "Unknown"
    assert JobRecord(source="JSearch").source == "JSearch"


@pytest.mark.unit
def test_fields_are_coerced_to_text():
    record = JobRecord(id=42, salary=120000.5, employment_type=["FULLTIME", None, "PARTTIME"])
    assert record.id == "42"
    assert record.salary == "120000.5"
    assert record.employment_type == "FULLTIME, PARTTIME"
    assert record.title is None


@pytest.mark.unit
def test_invocation_result_constructors():
    ok = InvocationResult.success("A", [JobRecord(source="A")])
    failed = InvocationResult.failure("B", "HTTP 500")

    assert ok.ok and ok.error is None and len(ok.data) == 1
    assert not failed.ok and failed.data == [] and failed.error == "HTTP 500"


@pytest.mark.unit
def test_aggregation_credential_and_failed_sources():
    aggregation = Aggregation(
        credentials=["k1", "k2"],
        results=[InvocationResult.success("A", []), InvocationResult.failure("B", "down")],
    )
    assert aggregation.credential == "k1, k2"
    assert aggregation.failed_sources == ["B"]
