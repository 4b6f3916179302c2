"""Write the export batch to the pipe-delimited text sink."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from scrape_articles.errors import MalformedDateError, TextSinkError
from scrape_articles.models import ArticleRecord, SkippedArticle, TextSinkResult
from scrape_articles.normalize_dates.normalize_date import normalize_date

logger = logging.getLogger(__name__)

HEADER = "id | URL | headline | author | date"
SEPARATOR = " | "


def format_line(record: ArticleRecord) -> str:
    """Render one exported record. Embedded separators are not escaped."""
    return SEPARATOR.join([
        str(record.id),
        record.url,
        f'"{record.headline}"',
        record.author,
        record.normalized_date or "",
    ])


def write_text_sink(
    records: list[ArticleRecord],
    path: str | Path,
    reference_year: Optional[int] = None,
) -> TextSinkResult:
    """Overwrite the text sink with the header, then append one line per record.

    Records whose date cannot be normalized are logged and left out; ids are
    assigned from 1 over the lines actually written.

    Raises:
        TextSinkError: If the file cannot be created or written.
    """
    if reference_year is None:
        reference_year = date.today().year

    filepath = Path(path)
    result = TextSinkResult(path=str(filepath))

    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_text(HEADER + "\n")

        with filepath.open("a") as f:
            next_id = 1
            for index, record in enumerate(records):
                try:
                    normalized = normalize_date(record.raw_date, reference_year)
                except MalformedDateError as e:
                    logger.warning(
                        "Skipping record %d (%s) in text sink: %s", index, record.url, e
                    )
                    result.skipped.append(
                        SkippedArticle(index=index, reason=e.reason, field="date", raw_value=record.raw_date)
                    )
                    continue

                record.id = next_id
                record.normalized_date = normalized
                f.write(format_line(record) + "\n")
                next_id += 1
                result.written += 1
    except OSError as exc:
        raise TextSinkError(str(filepath), str(exc)) from exc

    logger.info("Saved %d records to %s (%d skipped)", result.written, filepath, len(result.skipped))
    return result


def read_text_sink(path: str | Path) -> list[str]:
    """Read the text sink back as a list of lines without trailing newlines."""
    return Path(path).read_text().splitlines()
