"""Scrape the listing page, write both sinks, then verify them."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from common.db import get_connection, get_engine
from scrape_articles.config import Config, validate_selectors
from scrape_articles.errors import (
    ConfigError,
    ExitCode,
    PageFetchError,
    StoreError,
    TextSinkError,
    ValidationMismatchError,
)
from scrape_articles.fetch_articles.extract_articles import extract_articles, to_records
from scrape_articles.fetch_articles.page_fetcher import PageFetcher
from scrape_articles.models import ExtractionResult, RunSummary
from scrape_articles.sinks.row_store import persist_articles
from scrape_articles.sinks.text_sink import write_text_sink
from scrape_articles.verify.verify_sinks import verify_sinks

logger = logging.getLogger(__name__)


def _extract(config: Config, fetcher) -> ExtractionResult:
    if fetcher is not None:
        return extract_articles(fetcher, config.site)
    with PageFetcher(timeout=config.site.request_timeout, user_agent=config.site.user_agent) as page_fetcher:
        return extract_articles(page_fetcher, config.site)


def scrape_articles(
    config: Config,
    fetcher=None,
    engine: Optional[Engine] = None,
    reference_year: Optional[int] = None,
) -> RunSummary:
    """Run extraction, the text sink, the row store and verification in sequence.

    A failing stage is logged and recorded in the summary; later stages still
    run where they have something to work on.
    """
    summary = RunSummary()

    try:
        validate_selectors(config.site)
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        summary.fail(ExitCode.CONFIG_ERROR)
        return summary

    # Extract
    try:
        extraction = _extract(config, fetcher)
    except PageFetchError as e:
        logger.error("Extraction failed: %s", e)
        summary.fail(ExitCode.EXTRACTION_FAILED)
        return summary

    summary.extracted = len(extraction.articles)
    summary.skipped_extraction = len(extraction.skipped)
    if not extraction.articles:
        logger.warning("0 Articles extracted")
        summary.fail(ExitCode.EXTRACTION_FAILED)
        return summary

    batch = to_records(extraction.articles)

    # Text sink
    try:
        text_result = write_text_sink(batch, config.text_sink.path, reference_year)
        summary.written = text_result.written
        summary.skipped_text_sink = len(text_result.skipped)
    except TextSinkError as e:
        logger.error("Text sink failed: %s", e)
        summary.fail(ExitCode.TEXT_SINK_FAILED)

    # Row store and verification share one connection
    owns_engine = engine is None
    try:
        if owns_engine:
            engine = get_engine(config.row_store.database_url)
        with get_connection(engine) as connection:
            try:
                persisted = persist_articles(batch, connection)
                summary.inserted = len(persisted.inserted)
                summary.duplicates = len(persisted.duplicates)
                summary.failed_inserts = len(persisted.failed)
                if persisted.failed:
                    summary.fail(ExitCode.STORE_FAILED)
            except StoreError as e:
                logger.error("Row store failed: %s", e)
                summary.fail(ExitCode.STORE_FAILED)

            if config.verify.enabled:
                summary.report = verify_sinks(batch, config.text_sink.path, connection)
                try:
                    summary.report.raise_for_mismatch()
                except ValidationMismatchError as e:
                    logger.error("Verification failed: %s", e)
                    summary.fail(ExitCode.VALIDATION_FAILED)
    except SQLAlchemyError as e:
        logger.error("Row store connection failed: %s", e)
        summary.fail(ExitCode.STORE_FAILED)
    finally:
        if owns_engine and engine is not None:
            engine.dispose()

    logger.info(
        "Run finished: %d extracted, %d written to text sink, %d inserted, %d duplicates (exit code %d)",
        summary.extracted,
        summary.written,
        summary.inserted,
        summary.duplicates,
        summary.exit_code,
    )
    return summary
