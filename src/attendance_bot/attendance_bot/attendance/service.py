from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional, Sequence, Union

from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty
from ..core.constants import ABSENT_REASON_PLACEHOLDER
from ..core.enums import AttendanceStatus
from ..core.results import NotFound, Success
from .model import AttendanceRecord, Caller
from .repository import AttendanceRepository
from .requests import AddAttendanceRequest, ListRecentRequest, UpdateProofRequest

logger = logging.getLogger(__name__)


class AttendanceService:
    """Attendance record lifecycle: add, amend proof, list recent.

    Every method performs at most one read and one write against the
    repository. Storage errors propagate to the caller unchanged.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        clock: Callable[[], datetime] = now_utc,
        absent_reason_placeholder: str = ABSENT_REASON_PLACEHOLDER,
    ):
        self._attendance = attendance
        self._clock = clock
        self._absent_reason_placeholder = absent_reason_placeholder

    def _resolve_reason(self, status: AttendanceStatus, reason: Optional[str]) -> Optional[str]:
        if reason is not None:
            return reason
        if status == AttendanceStatus.ABSENT:
            return self._absent_reason_placeholder
        return None

    def add_record(self, caller: Caller, request: AddAttendanceRequest) -> Success[AttendanceRecord]:
        subject = require_non_empty(request.subject, "class")
        reason = self._resolve_reason(request.status, request.reason)
        created_at = self._clock()

        record_id = self._attendance.create(
            owner_id=caller.owner_id,
            owner_display_name=caller.display_name,
            subject=subject,
            status=request.status,
            reason=reason,
            proof=request.proof,
            created_at=created_at,
        )
        logger.info("Attendance %s saved for %s (%s, %s)", record_id, caller.owner_id, subject, request.status.value)

        return Success(
            AttendanceRecord(
                record_id=record_id,
                owner_id=caller.owner_id,
                owner_display_name=caller.display_name,
                subject=subject,
                status=request.status,
                created_at=created_at,
                reason=reason,
                proof=request.proof,
            )
        )

    def update_proof(
        self, caller: Caller, request: UpdateProofRequest
    ) -> Union[Success[AttendanceRecord], NotFound]:
        record = self._attendance.find_owned(request.record_id, caller.owner_id)
        if not record:
            return NotFound()

        updated = self._attendance.update_proof(
            record_id=record.record_id,
            owner_id=caller.owner_id,
            proof=request.proof,
        )
        if not updated:
            return NotFound()

        logger.info("Proof replaced on attendance %s for %s", record.record_id, caller.owner_id)
        return Success(replace(record, proof=request.proof))

    def list_recent(self, caller: Caller, request: ListRecentRequest) -> Success[Sequence[AttendanceRecord]]:
        rows = self._attendance.list_recent_by_owner(caller.owner_id, request.effective_limit)
        return Success(tuple(rows))
