from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.validators import clamp
from ..core.constants import DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT, MIN_LIST_LIMIT
from ..core.enums import AttendanceStatus
from .model import ProofAttachment


@dataclass(frozen=True)
class AddAttendanceRequest:
    """Arguments of `attend_add`.

    `reason=None` means the user omitted it; an empty string is kept as given.
    """

    subject: str
    status: AttendanceStatus
    reason: Optional[str] = None
    proof: Optional[ProofAttachment] = None


@dataclass(frozen=True)
class UpdateProofRequest:
    record_id: int
    proof: ProofAttachment


@dataclass(frozen=True)
class ListRecentRequest:
    """Arguments of `attend_list`.

    Omitted limit defaults to 5; an explicit limit is clamped into [1, 20].
    """

    limit: Optional[int] = None

    @property
    def effective_limit(self) -> int:
        if self.limit is None:
            return DEFAULT_LIST_LIMIT
        return clamp(int(self.limit), MIN_LIST_LIMIT, MAX_LIST_LIMIT)
