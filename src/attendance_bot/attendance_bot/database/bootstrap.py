from __future__ import annotations

import logging

from sqlalchemy import inspect

from .connection import DatabaseConnection
from .schema import metadata

logger = logging.getLogger(__name__)


def apply_schema(conn_factory: DatabaseConnection) -> None:
    """Create missing tables and indexes (idempotent)."""

    metadata.create_all(conn_factory.engine, checkfirst=True)
    logger.info("Schema ready on %s (tables=%d)", conn_factory.backend, len(list_tables(conn_factory)))


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    return sorted(inspect(conn_factory.engine).get_table_names())
