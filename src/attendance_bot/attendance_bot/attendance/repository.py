from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, ProofAttachment


class AttendanceRepository(Protocol):
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
        raise NotImplementedError

    def find_owned(self, record_id: int, owner_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def update_proof(self, *, record_id: int, owner_id: str, proof: ProofAttachment) -> bool:
        """Overwrite the proof of one owned record. Returns False if nothing matched."""

        raise NotImplementedError

    def list_recent_by_owner(self, owner_id: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
