from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from aiogram import Bot, types
from aiogram.exceptions import TelegramBadRequest
from aiogram.types import ReplyParameters
from aiogram.utils.media_group import MediaGroupBuilder

from ..draft import MAX_IMAGES
from ..engine import PUBLISHED_TEXT
from ..intents import (
    ConfirmPublished,
    Intent,
    KeyboardUpdated,
    Prompt,
    PublishedRecord,
    PublishToChannel,
    RetractRequested,
    ValidationError,
)

logger = logging.getLogger(__name__)

PARSE_MODE = "Markdown"


@dataclass(frozen=True)
class RetractOutcome:
    ok: bool
    error: str | None = None


def message_link(chat: types.Chat, message_id: int) -> str:
    if chat.username:
        return f"https://t.me/{chat.username}/{message_id}"
    # приватный канал: -1001234567890 -> t.me/c/1234567890/...
    internal = str(chat.id).removeprefix("-100")
    return f"https://t.me/c/{internal}/{message_id}"


class IntentExecutor:
    """Выполняет намерения движка через Bot API."""

    def __init__(self, bot: Bot, channel: int | str) -> None:
        self.bot = bot
        self.channel = channel

    # --------------------------------------------------------------------------- #
    #                             публикация в канал                              #
    # --------------------------------------------------------------------------- #

    async def publish(self, post: PublishToChannel) -> PublishedRecord:
        if post.is_media_group:
            mg = MediaGroupBuilder()
            mg.add_photo(media=post.images[0], caption=post.text, parse_mode=PARSE_MODE)
            for p in post.images[1:MAX_IMAGES]:
                mg.add_photo(media=p)
            msgs = await self.bot.send_media_group(self.channel, mg.build())
        else:
            msgs = [await self.bot.send_message(self.channel, post.text, parse_mode=PARSE_MODE)]

        first = msgs[0]
        return PublishedRecord(
            chat_id=first.chat.id,
            message_ids=tuple(m.message_id for m in msgs),
            link=message_link(first.chat, first.message_id),
        )

    async def retract(self, intent: RetractRequested) -> RetractOutcome:
        try:
            await self.bot.delete_messages(intent.chat_id, list(intent.message_ids))
        except Exception as e:
            return RetractOutcome(ok=False, error=str(e))
        return RetractOutcome(ok=True)

    # --------------------------------------------------------------------------- #
    #                             ответы пользователю                             #
    # --------------------------------------------------------------------------- #

    async def run(self, intents: Iterable[Intent], *, call: types.CallbackQuery | None = None) -> None:
        for intent in intents:
            if isinstance(intent, Prompt):
                await self.bot.send_message(
                    intent.conversation_id, intent.text, reply_markup=intent.keyboard
                )
            elif isinstance(intent, ValidationError):
                reply = ReplyParameters(message_id=intent.reply_to) if intent.reply_to else None
                await self.bot.send_message(
                    intent.conversation_id, intent.text, reply_parameters=reply
                )
            elif isinstance(intent, KeyboardUpdated):
                await self._edit_markup(call, intent)
            elif isinstance(intent, ConfirmPublished):
                text = PUBLISHED_TEXT
                if intent.link:
                    text += f"\n{intent.link}"
                await self.bot.send_message(
                    intent.conversation_id, text, reply_markup=intent.retract_control
                )
            elif isinstance(intent, RetractRequested):
                outcome = await self.retract(intent)
                if not outcome.ok:
                    logger.warning(
                        "retract of %s in %s failed: %s",
                        list(intent.message_ids), intent.chat_id, outcome.error,
                    )
            else:
                raise TypeError(f"unsupported intent: {intent!r}")

    async def _edit_markup(self, call: types.CallbackQuery | None, intent: KeyboardUpdated) -> None:
        if call is None or call.message is None:
            logger.warning("keyboard update for %s without a source message", intent.conversation_id)
            return
        try:
            await call.message.edit_reply_markup(reply_markup=intent.keyboard)
        except TelegramBadRequest as e:
            # "message is not modified" при двойном нажатии
            logger.debug("keyboard edit skipped: %s", e)
