from __future__ import annotations

import re
import shlex
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from ..attendance.model import Caller, ProofAttachment
from ..attendance.requests import AddAttendanceRequest, ListRecentRequest, UpdateProofRequest
from ..common.validators import require_int, require_non_empty, require_status
from ..core.exceptions import ValidationError

COMMAND_ADD = "attend_add"
COMMAND_UPDATE_FILE = "attend_updatefile"
COMMAND_LIST = "attend_list"
COMMAND_HELP = "help"
COMMAND_START = "start"

ATTENDANCE_COMMANDS = (COMMAND_ADD, COMMAND_UPDATE_FILE, COMMAND_LIST)
HELP_COMMANDS = (COMMAND_HELP, COMMAND_START)

COMMAND_DESCRIPTIONS = {
    COMMAND_ADD: "Add your attendance for a class",
    COMMAND_UPDATE_FILE: "Update / add proof file for an old attendance record",
    COMMAND_LIST: "Show your recent attendance records",
    COMMAND_HELP: "How to use the attendance commands",
}

USAGE = {
    COMMAND_ADD: '/attend_add <class> <present|absent> [reason]  (attach a photo/PDF as proof)',
    COMMAND_UPDATE_FILE: "/attend_updatefile <id>  (attach the new proof, or reply to a message that has it)",
    COMMAND_LIST: "/attend_list [limit]  (default 5, max 20)",
}

# Commands sent as the caption of a photo or document.
CAPTION_COMMAND_PATTERN = r"^/(?:%s)(?:@\w+)?(?:\s|$)" % "|".join(ATTENDANCE_COMMANDS)

_COMMAND_RE = re.compile(r"^/(?P<name>\w+)(?:@(?P<mention>\w+))?(?:\s+(?P<rest>.*))?$", re.DOTALL)


@dataclass(frozen=True)
class CommandCall:
    name: str
    mention: Optional[str] = None
    argv: List[str] = field(default_factory=list)

    def addressed_to(self, bot_username: Optional[str]) -> bool:
        if not self.mention or not bot_username:
            return True
        return self.mention.lower() == bot_username.lower()


def split_command(text: Optional[str]) -> Optional[CommandCall]:
    """Split '/name@bot arg "quoted arg"' into its parts. Returns None for non-commands."""

    m = _COMMAND_RE.match((text or "").strip())
    if not m:
        return None

    rest = m.group("rest") or ""
    try:
        argv = shlex.split(rest)
    except ValueError:
        raise ValidationError("unbalanced quotes in arguments") from None

    return CommandCall(name=m.group("name").lower(), mention=m.group("mention"), argv=argv)


def caller_from_user(user: Any) -> Caller:
    display_name = f"@{user.username}" if getattr(user, "username", None) else user.full_name
    return Caller(owner_id=str(user.id), display_name=display_name)


def extract_attachment(message: Any) -> Optional[ProofAttachment]:
    """Resolve the proof file from a message, or from the message it replies to.

    The Telegram file_id is kept as the url: it stays valid for the bot, while
    download links embed the bot token.
    """

    for candidate in (message, getattr(message, "reply_to_message", None)):
        if candidate is None:
            continue

        document = getattr(candidate, "document", None)
        if document:
            return ProofAttachment(url=document.file_id, display_name=document.file_name or "document")

        photos = getattr(candidate, "photo", None)
        if photos:
            largest = photos[-1]
            return ProofAttachment(url=largest.file_id, display_name=f"photo_{largest.file_unique_id}.jpg")

    return None


def parse_add(argv: Sequence[str], attachment: Optional[ProofAttachment]) -> AddAttendanceRequest:
    if len(argv) < 2:
        raise ValidationError("class and status are required")

    subject = require_non_empty(argv[0], "class")
    status = require_status(argv[1])
    reason = " ".join(argv[2:]) if len(argv) > 2 else None
    return AddAttendanceRequest(subject=subject, status=status, reason=reason, proof=attachment)


def parse_update_file(argv: Sequence[str], attachment: Optional[ProofAttachment]) -> UpdateProofRequest:
    if len(argv) != 1:
        raise ValidationError("exactly one attendance id is required")
    record_id = require_int(argv[0], "id")
    if attachment is None:
        raise ValidationError("a proof file is required")
    return UpdateProofRequest(record_id=record_id, proof=attachment)


def parse_list(argv: Sequence[str], attachment: Optional[ProofAttachment] = None) -> ListRecentRequest:
    if len(argv) > 1:
        raise ValidationError("at most one limit is allowed")
    if not argv:
        return ListRecentRequest()
    return ListRecentRequest(limit=require_int(argv[0], "limit"))
