"""Tests for common.db module."""

import pytest
from sqlalchemy import text

from common.db import get_connection, get_engine, transaction


@pytest.fixture
def engine(tmp_path):
    engine = get_engine(f"sqlite:///{tmp_path / 'data' / 'test.db'}")
    yield engine
    engine.dispose()


class TestGetEngine:
    def test_creates_parent_directory(self, engine, tmp_path) -> None:
        assert (tmp_path / "data").is_dir()

    def test_in_memory_url(self) -> None:
        engine = get_engine("sqlite://")
        with get_connection(engine) as conn:
            assert conn.execute(text("SELECT 1")).scalar_one() == 1
        engine.dispose()


class TestGetConnection:
    def test_commits_open_transaction(self, engine) -> None:
        with get_connection(engine) as conn:
            conn.execute(text("CREATE TABLE t (x INTEGER)"))
            conn.execute(text("INSERT INTO t VALUES (1)"))
        with get_connection(engine) as conn:
            assert conn.execute(text("SELECT COUNT(*) FROM t")).scalar_one() == 1

    def test_rolls_back_on_error(self, engine) -> None:
        with get_connection(engine) as conn:
            conn.execute(text("CREATE TABLE t (x INTEGER)"))

        with pytest.raises(RuntimeError):
            with get_connection(engine) as conn:
                conn.execute(text("INSERT INTO t VALUES (1)"))
                raise RuntimeError("boom")

        with get_connection(engine) as conn:
            assert conn.execute(text("SELECT COUNT(*) FROM t")).scalar_one() == 0

    def test_closes_connection(self, engine) -> None:
        with get_connection(engine) as conn:
            pass
        assert conn.closed


class TestTransaction:
    def test_nested_savepoint_rolls_back_alone(self, engine) -> None:
        with get_connection(engine) as conn:
            conn.execute(text("CREATE TABLE t (x INTEGER)"))
            conn.commit()

            with transaction(conn):
                conn.execute(text("INSERT INTO t VALUES (1)"))
                with pytest.raises(RuntimeError):
                    with transaction(conn):
                        conn.execute(text("INSERT INTO t VALUES (2)"))
                        raise RuntimeError("boom")

            assert conn.execute(text("SELECT x FROM t")).scalars().all() == [1]
