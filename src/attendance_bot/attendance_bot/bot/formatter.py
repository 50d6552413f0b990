"""MarkdownV2 rendering of command outcomes."""

from __future__ import annotations

from typing import Sequence

from telegram.constants import MessageLimit
from telegram.helpers import escape_markdown

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import format_display
from ..core.exceptions import ValidationError
from ..core.results import Failure, NotFound, Outcome
from .commands import ATTENDANCE_COMMANDS, COMMAND_DESCRIPTIONS, USAGE

FAILURE_MESSAGE = "⚠️ Something went wrong while processing your command."
NOT_FOUND_MESSAGE = "❌ No attendance found with that ID (for you)."
NO_RECORDS_MESSAGE = "📭 No attendance records yet."
ADD_FOOTER = "Use /attend_list to see your records or /attend_updatefile to add proof later."

# Longest class, reason or file name shown per list entry.
LIST_FIELD_WIDTH = 200


def esc(value: object) -> str:
    return escape_markdown(str(value), version=2)


def esc_code(value: object) -> str:
    return escape_markdown(str(value), version=2, entity_type="code")


def _field(name: str, value: object) -> str:
    return f"*{esc(name)}:* {esc(value)}"


def render_failure() -> str:
    return esc(FAILURE_MESSAGE)


def render_usage(command: str, error: ValidationError) -> str:
    usage = USAGE.get(command)
    if not usage:
        return f"⚠️ {esc(error)}"
    return f"⚠️ {esc(error)}\n\nUsage: `{esc_code(usage)}`"


def render_help() -> str:
    lines = ["👋 *Attendance bot*", ""]
    for name in ATTENDANCE_COMMANDS:
        lines.append(f"• {esc(COMMAND_DESCRIPTIONS[name])}")
        lines.append(f"  `{esc_code(USAGE[name])}`")
    return "\n".join(lines)


def render_add(outcome: Outcome) -> str:
    if isinstance(outcome, Failure):
        return render_failure()

    record: AttendanceRecord = outcome.payload
    lines = [
        "✅ *Attendance Saved*",
        _field("ID", record.record_id),
        _field("Class", record.subject),
        _field("Status", record.status.label),
    ]
    if record.reason:
        lines.append(_field("Reason", record.reason))
    if record.proof:
        lines.append(_field("Proof", record.proof.display_name or record.proof.url))
    lines.append("")
    lines.append(f"_{esc(ADD_FOOTER)}_")
    return "\n".join(lines)


def render_update_file(outcome: Outcome) -> str:
    if isinstance(outcome, Failure):
        return render_failure()
    if isinstance(outcome, NotFound):
        return esc(NOT_FOUND_MESSAGE)

    record: AttendanceRecord = outcome.payload
    return "\n".join(
        [
            "🔄 *Proof Updated*",
            f"Updated proof for ID *{esc(record.record_id)}*",
            _field("Class", record.subject),
            _field("Status", record.status.label),
            _field("File", record.proof.display_name),
        ]
    )


def _shorten(value: str, width: int = LIST_FIELD_WIDTH) -> str:
    return value if len(value) <= width else value[: width - 1] + "…"


def _telegram_length(text: str) -> int:
    # Telegram counts UTF-16 code units.
    return len(text.encode("utf-16-le")) // 2


def _render_list_entry(position: int, record: AttendanceRecord) -> str:
    line = (
        f"{position}\\. *ID {esc(record.record_id)}* \\| {esc(_shorten(record.subject))} \\| "
        f"{esc(record.status.label)} \\| {esc(format_display(record.created_at))}"
    )
    if record.reason:
        line += f"\n{_field('Reason', _shorten(record.reason))}"
    if record.proof:
        line += f"\n{_field('Proof', _shorten(record.proof.display_name))}"
    return line


def _list_message(entries: Sequence[str], total: int) -> str:
    text = f"📒 *Your last {len(entries)} attendance records:*\n\n" + "\n\n".join(entries)
    hidden = total - len(entries)
    if hidden:
        text += f"\n\n_{esc(f'{hidden} older records not shown.')}_"
    return text


def render_list(outcome: Outcome) -> str:
    """Newest-first listing, cut short before it exceeds one Telegram message."""

    if isinstance(outcome, Failure):
        return render_failure()

    records: Sequence[AttendanceRecord] = outcome.payload
    if not records:
        return esc(NO_RECORDS_MESSAGE)

    entries: list[str] = []
    for position, record in enumerate(records, start=1):
        entry = _render_list_entry(position, record)
        if _telegram_length(_list_message(entries + [entry], len(records))) > MessageLimit.MAX_TEXT_LENGTH:
            break
        entries.append(entry)
    return _list_message(entries, len(records))
