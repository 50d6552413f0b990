from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Optional

import pytest
from telegram.error import Forbidden

from attendance_bot.attendance.model import AttendanceRecord
from attendance_bot.attendance.service import AttendanceService
from attendance_bot.bot import formatter
from attendance_bot.bot.dispatcher import CommandDispatcher
from attendance_bot.container import build_container
from attendance_bot.core.enums import AttendanceStatus


class InMemoryAttendance:
    def __init__(self):
        self.records: dict[int, AttendanceRecord] = {}

    def create(self, *, owner_id, owner_display_name, subject, status, reason, proof, created_at) -> int:
        rid = len(self.records) + 1
        self.records[rid] = AttendanceRecord(rid, owner_id, owner_display_name, subject, status, created_at, reason, proof)
        return rid

    def find_owned(self, record_id, owner_id) -> Optional[AttendanceRecord]:
        rec = self.records.get(record_id)
        return rec if rec and rec.owner_id == owner_id else None

    def update_proof(self, *, record_id, owner_id, proof) -> bool:
        rec = self.find_owned(record_id, owner_id)
        if not rec:
            return False
        self.records[record_id] = replace(rec, proof=proof)
        return True

    def list_recent_by_owner(self, owner_id, limit):
        items = [r for r in self.records.values() if r.owner_id == owner_id]
        return sorted(items, key=lambda r: r.record_id, reverse=True)[:limit]


class BrokenAttendance(InMemoryAttendance):
    def list_recent_by_owner(self, owner_id, limit):
        raise RuntimeError("database is locked")


class FakeBot:
    def __init__(self, username: str = "ClassAttendBot", blocked: bool = False):
        self.username = username
        self.sent: list[tuple[int, str]] = []
        self._blocked = blocked

    async def send_message(self, chat_id, text, **kwargs):
        if self._blocked:
            raise Forbidden("Forbidden: bot can't initiate conversation with a user")
        self.sent.append((chat_id, text))


class FakeMessage:
    def __init__(self, text=None, caption=None, document=None, photo=(), reply_to_message=None):
        self.text = text
        self.caption = caption
        self.document = document
        self.photo = photo
        self.reply_to_message = reply_to_message
        self.replies: list[str] = []

    async def reply_text(self, text, **kwargs):
        self.replies.append(text)


class UnreachableMessage(FakeMessage):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.attempts = 0

    async def reply_text(self, text, **kwargs):
        self.attempts += 1
        raise Forbidden("Forbidden: bot was kicked from the group chat")


def _update(message: FakeMessage, user_id: int = 42, username: str = "alice"):
    user = SimpleNamespace(id=user_id, username=username, full_name="Alice A")
    return SimpleNamespace(effective_message=message, effective_user=user)


def _dispatch(dispatcher: CommandDispatcher, message: FakeMessage, bot: FakeBot, user_id: int = 42) -> None:
    asyncio.run(dispatcher.dispatch(_update(message, user_id=user_id), SimpleNamespace(bot=bot)))


@pytest.fixture
def repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def dispatcher(repo) -> CommandDispatcher:
    return CommandDispatcher(AttendanceService(repo))


def test_add_replies_privately_once(dispatcher, repo):
    bot = FakeBot()
    message = FakeMessage(text="/attend_add Math absent")

    _dispatch(dispatcher, message, bot)

    assert len(bot.sent) == 1
    chat_id, text = bot.sent[0]
    assert chat_id == 42
    assert "Attendance Saved" in text
    assert message.replies == []
    assert repo.records[1].reason == "Not provided"
    assert repo.records[1].owner_display_name == "@alice"


def test_add_from_document_caption_stores_proof(dispatcher, repo):
    doc = SimpleNamespace(file_id="DOC1", file_name="f.pdf")

    _dispatch(dispatcher, FakeMessage(caption="/attend_add Physics present", document=doc), FakeBot())

    assert repo.records[1].proof.url == "DOC1"
    assert repo.records[1].proof.display_name == "f.pdf"


def test_update_file_for_someone_elses_record_is_not_found(dispatcher, repo):
    _dispatch(dispatcher, FakeMessage(text="/attend_add Math present"), FakeBot(), user_id=1)
    bot = FakeBot()
    doc = SimpleNamespace(file_id="DOC9", file_name="x.pdf")

    _dispatch(dispatcher, FakeMessage(caption="/attend_updatefile 1", document=doc), bot, user_id=2)

    assert bot.sent == [(2, formatter.esc(formatter.NOT_FOUND_MESSAGE))]
    assert repo.records[1].proof is None


def test_invalid_arguments_get_usage_and_skip_the_store(dispatcher, repo):
    bot = FakeBot()

    _dispatch(dispatcher, FakeMessage(text="/attend_add Math late"), bot)

    assert len(bot.sent) == 1
    assert "Usage" in bot.sent[0][1]
    assert repo.records == {}


def test_list_without_records(dispatcher):
    bot = FakeBot()

    _dispatch(dispatcher, FakeMessage(text="/attend_list"), bot)

    assert bot.sent == [(42, formatter.esc(formatter.NO_RECORDS_MESSAGE))]


def test_storage_failure_becomes_one_generic_reply():
    dispatcher = CommandDispatcher(AttendanceService(BrokenAttendance()))
    bot = FakeBot()

    _dispatch(dispatcher, FakeMessage(text="/attend_list 3"), bot)

    assert bot.sent == [(42, formatter.render_failure())]


def test_undeliverable_reply_falls_back_to_the_invoking_chat(dispatcher, repo):
    message = FakeMessage(text="/attend_add Math present")

    _dispatch(dispatcher, message, FakeBot(blocked=True))

    assert message.replies == [formatter.render_failure()]


def test_command_for_another_bot_is_ignored(dispatcher, repo):
    bot = FakeBot()
    message = FakeMessage(text="/attend_add@OtherBot Math present")

    _dispatch(dispatcher, message, bot)

    assert bot.sent == []
    assert message.replies == []
    assert repo.records == {}


def test_help_lists_commands(dispatcher):
    bot = FakeBot()

    _dispatch(dispatcher, FakeMessage(text="/help"), bot)

    assert len(bot.sent) == 1
    assert "attend_updatefile" in bot.sent[0][1]


def test_list_after_add_shows_status_upper_case(dispatcher):
    _dispatch(dispatcher, FakeMessage(text="/attend_add Math absent"), FakeBot())
    bot = FakeBot()

    _dispatch(dispatcher, FakeMessage(text="/attend_list 1"), bot)

    text = bot.sent[0][1]
    assert "Your last 1 attendance records" in text
    assert "ABSENT" in text
    assert datetime.now(timezone.utc).strftime("%Y") in text


def test_update_file_with_oversized_id_is_not_found(tmp_path):
    container = build_container(database_url=f"sqlite:///{tmp_path / 'attendance.db'}")
    dispatcher = CommandDispatcher(container.attendance_service)
    bot = FakeBot()
    doc = SimpleNamespace(file_id="DOC9", file_name="x.pdf")

    try:
        _dispatch(dispatcher, FakeMessage(caption="/attend_updatefile 99999999999999999999", document=doc), bot)
    finally:
        container.conn.dispose()

    assert bot.sent == [(42, formatter.esc(formatter.NOT_FOUND_MESSAGE))]


def test_both_replies_failing_is_dropped_quietly(dispatcher, repo):
    message = UnreachableMessage(text="/attend_add Math present")
    bot = FakeBot(blocked=True)

    _dispatch(dispatcher, message, bot)

    assert bot.sent == []
    assert message.attempts == 1
    assert repo.records[1].subject == "Math"
