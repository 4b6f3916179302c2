"""Tests for scrape_articles.models module."""

import pytest

from scrape_articles.errors import ExitCode, ValidationMismatchError
from scrape_articles.models import RunSummary, ValidationReport


class TestValidationReport:
    def test_empty_report_passes(self) -> None:
        report = ValidationReport()
        assert report.passed
        report.raise_for_mismatch()

    def test_failures_listed(self) -> None:
        report = ValidationReport()
        report.add("header", True)
        report.add("id", False, "invalid id 'x'", line=2)
        assert not report.passed
        assert [(f.name, f.line) for f in report.failures] == [("id", 2)]

    def test_raise_for_mismatch(self) -> None:
        report = ValidationReport()
        report.add("row_count", False, "row store has 0 articles, expected 1")
        with pytest.raises(ValidationMismatchError, match="1 consistency check"):
            report.raise_for_mismatch()


class TestRunSummary:
    def test_ok_without_failures(self) -> None:
        assert RunSummary().exit_code == ExitCode.OK

    def test_earliest_stage_wins(self) -> None:
        summary = RunSummary()
        summary.fail(ExitCode.VALIDATION_FAILED)
        summary.fail(ExitCode.TEXT_SINK_FAILED)
        summary.fail(ExitCode.TEXT_SINK_FAILED)
        assert summary.failures == [ExitCode.VALIDATION_FAILED, ExitCode.TEXT_SINK_FAILED]
        assert summary.exit_code == ExitCode.TEXT_SINK_FAILED
