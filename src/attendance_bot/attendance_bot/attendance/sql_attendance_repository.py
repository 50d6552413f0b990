from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from sqlalchemy import insert, select, update

from ..common.datetime_utils import parse_iso, to_iso
from ..core.constants import MAX_RECORD_ID, MIN_RECORD_ID
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.schema import attendance_table as t
from ..database.sql_base import db_connection, fetchall, fetchone
from .model import AttendanceRecord, ProofAttachment
from .repository import AttendanceRepository


class SQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        owner_id: str,
        owner_display_name: str,
        subject: str,
        status: AttendanceStatus,
        reason: Optional[str],
        proof: Optional[ProofAttachment],
        created_at: datetime,
    ) -> int:
        with db_connection(self._conn_factory) as conn:
            result = conn.execute(
                insert(t).values(
                    user_id=owner_id,
                    user_name=owner_display_name,
                    subject=subject,
                    status=status.value,
                    reason=reason,
                    file_url=proof.url if proof else None,
                    file_name=proof.display_name if proof else None,
                    created_at=to_iso(created_at),
                )
            )
            return int(result.inserted_primary_key[0])

    def find_owned(self, record_id: int, owner_id: str) -> Optional[AttendanceRecord]:
        if not _storable_id(record_id):
            return None
        with db_connection(self._conn_factory) as conn:
            r = fetchone(
                conn.execute(
                    select(t).where(t.c.id == int(record_id), t.c.user_id == owner_id)
                )
            )
            if not r:
                return None
            return _to_record(r)

    def update_proof(self, *, record_id: int, owner_id: str, proof: ProofAttachment) -> bool:
        if not _storable_id(record_id):
            return False
        with db_connection(self._conn_factory) as conn:
            result = conn.execute(
                update(t)
                .where(t.c.id == int(record_id), t.c.user_id == owner_id)
                .values(file_url=proof.url, file_name=proof.display_name)
            )
            return result.rowcount > 0

    def list_recent_by_owner(self, owner_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_connection(self._conn_factory) as conn:
            rows = fetchall(
                conn.execute(
                    select(t)
                    .where(t.c.user_id == owner_id)
                    .order_by(t.c.created_at.desc(), t.c.id.desc())
                    .limit(int(limit))
                )
            )
            return [_to_record(r) for r in rows]


def _storable_id(record_id: int) -> bool:
    return MIN_RECORD_ID <= int(record_id) <= MAX_RECORD_ID


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    proof = None
    if r.get("file_url") is not None and r.get("file_name") is not None:
        proof = ProofAttachment(url=r["file_url"], display_name=r["file_name"])

    return AttendanceRecord(
        record_id=int(r["id"]),
        owner_id=r["user_id"],
        owner_display_name=r["user_name"],
        subject=r["subject"],
        status=AttendanceStatus(r["status"]),
        created_at=parse_iso(r["created_at"]),
        reason=r.get("reason"),
        proof=proof,
    )
