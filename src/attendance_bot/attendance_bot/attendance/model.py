from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class ProofAttachment:
    """Reference to an uploaded proof file: a durable url plus its display name."""

    url: str
    display_name: str


@dataclass(frozen=True)
class Caller:
    """Identity of the user invoking a command, as supplied by the chat platform."""

    owner_id: str
    display_name: str


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance entry.

    Only `proof` may change after creation.
    """

    record_id: int
    owner_id: str
    owner_display_name: str
    subject: str
    status: AttendanceStatus
    created_at: datetime
    reason: Optional[str] = None
    proof: Optional[ProofAttachment] = None
