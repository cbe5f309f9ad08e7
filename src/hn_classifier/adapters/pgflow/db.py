"""Postgres connection helpers."""

from contextlib import contextmanager
from typing import Iterator

import psycopg2
from psycopg2.extensions import cursor as Cursor
from psycopg2.extras import RealDictCursor


def get_connection(database_url: str):
    """Create a new database connection."""
    return psycopg2.connect(database_url)


@contextmanager
def get_cursor(database_url: str) -> Iterator[Cursor]:
    """Context manager for database cursor with automatic commit/rollback."""
    conn = get_connection(database_url)
    try:
        with conn.cursor(cursor_factory=RealDictCursor) as cur:
            yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
