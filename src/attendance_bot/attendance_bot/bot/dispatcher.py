from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from asgiref.sync import sync_to_async
from telegram import Update
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from ..attendance.model import Caller, ProofAttachment
from ..attendance.service import AttendanceService
from ..core.exceptions import ValidationError
from ..core.results import Failure, Outcome
from . import formatter
from .commands import (
    COMMAND_ADD,
    COMMAND_LIST,
    COMMAND_UPDATE_FILE,
    HELP_COMMANDS,
    caller_from_user,
    extract_attachment,
    parse_add,
    parse_list,
    parse_update_file,
    split_command,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandRoute:
    parse: Callable[[Any, Optional[ProofAttachment]], Any]
    run: Callable[[Caller, Any], Outcome]
    render: Callable[[Outcome], str]


class CommandDispatcher:
    """Routes attendance commands to the service and sends exactly one reply each.

    Replies go to the invoking user's private chat. Any unexpected error from a
    handler is logged here and turned into the generic failure reply.
    """

    def __init__(self, service: AttendanceService):
        self._routes: Dict[str, CommandRoute] = {
            COMMAND_ADD: CommandRoute(parse_add, service.add_record, formatter.render_add),
            COMMAND_UPDATE_FILE: CommandRoute(parse_update_file, service.update_proof, formatter.render_update_file),
            COMMAND_LIST: CommandRoute(parse_list, service.list_recent, formatter.render_list),
        }

    async def dispatch(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        message = update.effective_message
        user = update.effective_user
        if message is None or user is None:
            return

        try:
            call = split_command(message.text or message.caption)
        except ValidationError as e:
            await self._deliver(update, context, formatter.render_usage("", e))
            return

        if call is None or not call.addressed_to(context.bot.username):
            return

        if call.name in HELP_COMMANDS:
            await self._deliver(update, context, formatter.render_help())
            return

        route = self._routes.get(call.name)
        if route is None:
            return

        caller = caller_from_user(user)
        logger.info("Command /%s from %s", call.name, caller.owner_id)

        try:
            request = route.parse(call.argv, extract_attachment(message))
            outcome = await self._execute(route, caller, request)
            text = route.render(outcome)
        except ValidationError as e:
            text = formatter.render_usage(call.name, e)

        await self._deliver(update, context, text)

    async def _execute(self, route: CommandRoute, caller: Caller, request: Any) -> Outcome:
        try:
            return await sync_to_async(route.run)(caller, request)
        except ValidationError:
            raise
        except Exception as e:
            logger.exception("Error in command: %s", e)
            return Failure(detail=str(e))

    async def _deliver(self, update: Update, context: ContextTypes.DEFAULT_TYPE, text: str) -> None:
        try:
            await context.bot.send_message(
                chat_id=update.effective_user.id,
                text=text,
                parse_mode=ParseMode.MARKDOWN_V2,
            )
        except TelegramError as e:
            logger.error("Could not send reply to %s: %s", update.effective_user.id, e)
            await self._deliver_fallback(update)

    async def _deliver_fallback(self, update: Update) -> None:
        try:
            await update.effective_message.reply_text(
                formatter.render_failure(),
                parse_mode=ParseMode.MARKDOWN_V2,
            )
        except TelegramError as e:
            logger.error("Fallback reply failed for %s: %s", update.effective_user.id, e)
