"""Data models for the scrape_articles pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from scrape_articles.errors import ExitCode, ValidationMismatchError


@dataclass
class RawArticle:
    """Article fields as extracted from one list item, in document order."""
    headline: str
    url: str
    author: str
    raw_date: str


@dataclass
class ArticleRecord:
    """Article in the export batch; id and normalized_date are set by the text sink."""
    url: str
    headline: str
    author: str
    raw_date: str
    id: Optional[int] = None
    normalized_date: Optional[str] = None


@dataclass
class SkippedArticle:
    """Article left out of a stage, with the context needed to diagnose it."""
    index: int
    reason: str
    field: Optional[str] = None
    raw_value: Optional[str] = None


@dataclass
class ExtractionResult:
    """Articles extracted from the listing page plus the entries that were skipped."""
    articles: list[RawArticle] = field(default_factory=list)
    skipped: list[SkippedArticle] = field(default_factory=list)


@dataclass
class TextSinkResult:
    """Outcome of writing the text sink."""
    path: str
    written: int = 0
    skipped: list[SkippedArticle] = field(default_factory=list)


@dataclass
class PersistResult:
    """Outcome of inserting a batch into the row store, by record index."""
    inserted: list[int] = field(default_factory=list)
    duplicates: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)


@dataclass
class CheckResult:
    """One consistency check; line is the 1-based text sink line when relevant."""
    name: str
    passed: bool
    detail: str = ""
    line: Optional[int] = None


@dataclass
class ValidationReport:
    checks: list[CheckResult] = field(default_factory=list)

    @property
    def failures(self) -> list[CheckResult]:
        return [check for check in self.checks if not check.passed]

    @property
    def passed(self) -> bool:
        return not self.failures

    def add(self, name: str, passed: bool, detail: str = "", line: Optional[int] = None) -> CheckResult:
        check = CheckResult(name=name, passed=passed, detail=detail, line=line)
        self.checks.append(check)
        return check

    def raise_for_mismatch(self) -> None:
        """Raise ValidationMismatchError if any check failed."""
        if self.failures:
            raise ValidationMismatchError(self.failures)


@dataclass
class RunSummary:
    """Counts and failure classes for one run of the pipeline."""
    extracted: int = 0
    skipped_extraction: int = 0
    written: int = 0
    skipped_text_sink: int = 0
    inserted: int = 0
    duplicates: int = 0
    failed_inserts: int = 0
    report: Optional[ValidationReport] = None
    failures: list[ExitCode] = field(default_factory=list)

    def fail(self, code: ExitCode) -> None:
        if code not in self.failures:
            self.failures.append(code)

    @property
    def exit_code(self) -> ExitCode:
        if not self.failures:
            return ExitCode.OK
        return min(self.failures)
