from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, Index, Integer, MetaData, String, Table, Text

metadata = MetaData()

attendance_table = Table(
    "attendance",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(64), nullable=False),
    Column("user_name", String(255), nullable=False),
    Column("subject", String(255), nullable=False),
    Column("status", String(16), nullable=False),
    Column("reason", Text, nullable=True),
    Column("file_url", Text, nullable=True),
    Column("file_name", String(255), nullable=True),
    Column("created_at", String(40), nullable=False),
    CheckConstraint("status IN ('present', 'absent')", name="ck_attendance_status"),
    CheckConstraint("(file_url IS NULL) = (file_name IS NULL)", name="ck_attendance_proof_pair"),
    Index("ix_attendance_user_created", "user_id", "created_at"),
    # Ids are never reused, even after rows disappear.
    sqlite_autoincrement=True,
)
