from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy.engine import Connection, Result

from .connection import DatabaseConnection


@contextmanager
def db_connection(conn_factory: DatabaseConnection) -> Iterator[Connection]:
    conn = conn_factory.connect()
    trans = conn.begin()
    try:
        yield conn
        trans.commit()
    except Exception:
        trans.rollback()
        raise
    finally:
        conn.close()


def fetchone(result: Result) -> Optional[Dict[str, Any]]:
    row = result.mappings().first()
    return dict(row) if row else None


def fetchall(result: Result) -> List[Dict[str, Any]]:
    return [dict(r) for r in result.mappings().all()]
