"""Database engine and connection helpers."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)


def get_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for the given SQLAlchemy URL.

    SQLite engines get their transaction handling taken over from pysqlite so
    that SAVEPOINTs behave.
    """
    engine = create_engine(database_url, echo=echo)

    if engine.dialect.name == "sqlite":
        database = engine.url.database
        if database and database != ":memory:":
            Path(database).parent.mkdir(parents=True, exist_ok=True)

        @event.listens_for(engine, "connect")
        def on_connect(dbapi_conn, connection_record):
            dbapi_conn.isolation_level = None

        @event.listens_for(engine, "begin")
        def on_begin(conn):
            conn.exec_driver_sql("BEGIN")

    logger.info("Created database engine for %s", engine.url.render_as_string(hide_password=True))
    return engine


@contextmanager
def get_connection(engine: Engine) -> Iterator[Connection]:
    """Context manager for one connection, rolled back on error and always closed."""
    conn = engine.connect()
    try:
        yield conn
        if conn.in_transaction():
            conn.commit()
    except Exception:
        if conn.in_transaction():
            conn.rollback()
        raise
    finally:
        conn.close()
        logger.debug("Database connection closed")


def transaction(conn: Connection):
    """Begin a transaction, or a savepoint if one is already open."""
    if conn.in_transaction():
        return conn.begin_nested()
    return conn.begin()
