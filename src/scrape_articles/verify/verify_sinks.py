"""Check that the text sink and row store reflect the exported batch."""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy.engine import Connection

from scrape_articles.errors import StoreError
from scrape_articles.models import ArticleRecord, ValidationReport
from scrape_articles.sinks.row_store import count_articles, fetch_urls
from scrape_articles.sinks.text_sink import HEADER, read_text_sink

logger = logging.getLogger(__name__)

FIELD_COUNT = 5


def check_text_line(report: ValidationReport, line: str, line_number: int) -> None:
    """Run the per-line checks for one data line of the text sink."""
    fields = [field.strip() for field in line.strip().split("|")]

    if len(fields) != FIELD_COUNT:
        report.add("field_count", False, f"expected {FIELD_COUNT} fields, got {len(fields)}", line_number)
        return
    report.add("field_count", True, line=line_number)

    article_id, url, headline, author, date = fields

    try:
        int(article_id)
        report.add("id", True, line=line_number)
    except ValueError:
        report.add("id", False, f"invalid id {article_id!r}", line_number)

    report.add("url", url.startswith("http"), "" if url.startswith("http") else f"invalid URL {url!r}", line_number)

    for name, value in (("headline", headline), ("author", author), ("date", date)):
        report.add(name, bool(value), "" if value else f"empty {name}", line_number)


def verify_text_sink(report: ValidationReport, batch: list[ArticleRecord], path: str | Path) -> None:
    try:
        lines = read_text_sink(path)
    except OSError as e:
        report.add("text_sink_readable", False, str(e))
        return

    header = lines[0].strip() if lines else ""
    report.add("header", header == HEADER, "" if header == HEADER else f"unexpected header {header!r}", 1)

    data_lines = [(number, line) for number, line in enumerate(lines[1:], start=2) if line.strip()]
    for line_number, line in data_lines:
        check_text_line(report, line, line_number)

    report.add(
        "text_row_count",
        len(data_lines) == len(batch),
        f"text sink has {len(data_lines)} rows, expected {len(batch)}",
    )


def verify_row_store(report: ValidationReport, batch: list[ArticleRecord], connection: Connection) -> None:
    try:
        count = count_articles(connection)
        stored_urls = fetch_urls(connection)
    except StoreError as e:
        report.add("row_store_readable", False, str(e))
        return

    report.add("row_count", count == len(batch), f"row store has {count} articles, expected {len(batch)}")

    missing = [record.url for record in batch if record.url not in stored_urls]
    report.add("urls_present", not missing, f"missing from row store: {', '.join(missing)}" if missing else "")


def verify_sinks(
    batch: list[ArticleRecord],
    text_sink_path: str | Path,
    connection: Connection,
) -> ValidationReport:
    """Run every consistency check; failures are logged and returned, never raised."""
    logger.info("Verifying text sink %s and row store against %d articles", text_sink_path, len(batch))

    report = ValidationReport()
    verify_text_sink(report, batch, text_sink_path)
    verify_row_store(report, batch, connection)

    for failure in report.failures:
        if failure.line is not None:
            logger.error("Check %s failed on line %d: %s", failure.name, failure.line, failure.detail)
        else:
            logger.error("Check %s failed: %s", failure.name, failure.detail)

    if report.passed:
        logger.info("All %d checks passed", len(report.checks))
    else:
        logger.error("%d of %d checks failed", len(report.failures), len(report.checks))

    return report
