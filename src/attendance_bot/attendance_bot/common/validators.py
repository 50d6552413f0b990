from __future__ import annotations

from typing import Optional

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_status(value: Optional[str]) -> AttendanceStatus:
    normalized = (value or "").strip().lower()
    try:
        return AttendanceStatus(normalized)
    except ValueError:
        choices = " / ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"status must be one of: {choices}") from None


def require_int(value: Optional[str], field_name: str) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number") from None


def clamp(value: int, lower: int, upper: int) -> int:
    """Constrain value into the inclusive range [lower, upper]."""
    return max(lower, min(upper, value))
