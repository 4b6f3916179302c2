"""Persist the export batch into the articles table."""

import logging

from sqlalchemy import Column, Integer, MetaData, Table, Text, func, select
from sqlalchemy.dialects import sqlite
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from common.db import transaction
from scrape_articles.errors import StoreError
from scrape_articles.models import ArticleRecord, PersistResult

logger = logging.getLogger(__name__)

metadata = MetaData()

articles = Table(
    "articles",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("url", Text, unique=True),
    Column("headline", Text),
    Column("author", Text),
    Column("date", Text),
    sqlite_autoincrement=True,
)


def ensure_table(connection: Connection) -> None:
    """Create the articles table if it doesn't exist.

    Raises:
        StoreError: If the table cannot be created.
    """
    try:
        with transaction(connection):
            metadata.create_all(connection, checkfirst=True)
    except SQLAlchemyError as exc:
        raise StoreError(f"Failed to create articles table: {exc}") from exc


def persist_articles(records: list[ArticleRecord], connection: Connection) -> PersistResult:
    """
    Insert records into the articles table, skipping URLs already stored.

    The raw, unnormalized date is stored. The batch is one transaction and each
    insert its own savepoint, so a failing record is rolled back alone and the
    remaining inserts still run.

    Args:
        records: Export batch in order
        connection: Open SQLAlchemy connection

    Returns:
        PersistResult with inserted, duplicate and failed record indices

    Raises:
        StoreError: If the table cannot be created or the batch cannot be committed
    """
    ensure_table(connection)
    result = PersistResult()

    try:
        with transaction(connection):
            for index, record in enumerate(records):
                stmt = sqlite.insert(articles).values(
                    url=record.url,
                    headline=record.headline,
                    author=record.author,
                    date=record.raw_date,
                ).on_conflict_do_nothing()

                try:
                    with connection.begin_nested():
                        inserted = connection.execute(stmt)
                except SQLAlchemyError as e:
                    logger.error("Failed to insert article %d (%s): %s", index, record.url, e)
                    result.failed.append(index)
                    continue

                if inserted.rowcount > 0:
                    result.inserted.append(index)
                else:
                    logger.warning("Skipped duplicate article: index=%d url=%s", index, record.url)
                    result.duplicates.append(index)
    except SQLAlchemyError as exc:
        raise StoreError(f"Failed to commit articles batch: {exc}") from exc

    logger.info(
        "Loaded %d articles to row store (%d skipped as duplicates, %d failed)",
        len(result.inserted),
        len(result.duplicates),
        len(result.failed),
    )
    return result


def count_articles(connection: Connection) -> int:
    """Return the number of rows in the articles table."""
    try:
        with transaction(connection):
            return connection.execute(select(func.count()).select_from(articles)).scalar_one()
    except SQLAlchemyError as exc:
        raise StoreError(f"Failed to count articles: {exc}") from exc


def fetch_urls(connection: Connection) -> set[str]:
    """Return every URL stored in the articles table."""
    try:
        with transaction(connection):
            return set(connection.execute(select(articles.c.url)).scalars())
    except SQLAlchemyError as exc:
        raise StoreError(f"Failed to read article URLs: {exc}") from exc
