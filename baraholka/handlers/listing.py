from __future__ import annotations

import logging

from aiogram import F, Router, types
from aiogram.filters import Command, or_f

from ..engine import FAILURE_TEXT, RETRACTED_TEXT, CollaboratorFailure, WorkflowEngine
from ..intents import (
    Event,
    Identity,
    NewListingRequested,
    PhotoReceived,
    PublishRequested,
    PurposeChosen,
    RetractInvoked,
    TagToggled,
    TextReceived,
)
from ..keyboards import NEW_LISTING_TEXT, PUBLISH_TEXT
from .executor import IntentExecutor

logger = logging.getLogger(__name__)

router = Router()


async def dispatch(
    event: Event,
    engine: WorkflowEngine,
    executor: IntentExecutor,
    *,
    call: types.CallbackQuery | None = None,
) -> bool:
    """Прогоняет событие через движок и выполняет намерения. False при сбое."""
    try:
        intents = await engine.handle(event)
    except CollaboratorFailure:
        logger.exception("event %r failed", event)
        await executor.bot.send_message(event.conversation_id, FAILURE_TEXT)
        return False
    await executor.run(intents, call=call)
    return True


def identity_of(user: types.User) -> Identity:
    return Identity(
        user_id=user.id,
        first_name=user.first_name or "",
        last_name=user.last_name or "",
    )


# --------------------------------------------------------------------------- #
#                         команды и кнопки меню                               #
# --------------------------------------------------------------------------- #

@router.message(or_f(Command("create"), F.text == NEW_LISTING_TEXT))
async def on_new_listing(message: types.Message, engine: WorkflowEngine, executor: IntentExecutor):
    await dispatch(NewListingRequested(message.chat.id), engine, executor)


@router.message(or_f(Command("publish"), F.text == PUBLISH_TEXT))
async def on_publish(message: types.Message, engine: WorkflowEngine, executor: IntentExecutor):
    event = PublishRequested(message.chat.id, identity_of(message.from_user))
    await dispatch(event, engine, executor)


# --------------------------------------------------------------------------- #
#                           текст и фотографии                                #
# --------------------------------------------------------------------------- #

@router.message(F.photo)
async def on_photo(message: types.Message, engine: WorkflowEngine, executor: IntentExecutor):
    event = PhotoReceived(
        message.chat.id,
        file_ref=message.photo[-1].file_id,
        caption=message.caption,
        message_id=message.message_id,
    )
    await dispatch(event, engine, executor)


@router.message()
async def on_message(message: types.Message, engine: WorkflowEngine, executor: IntentExecutor):
    text = message.text or message.caption or ""
    event = TextReceived(message.chat.id, text, message_id=message.message_id)
    await dispatch(event, engine, executor)


# --------------------------------------------------------------------------- #
#                                 callback‑ы                                  #
# --------------------------------------------------------------------------- #

@router.callback_query(F.data.startswith("purpose:"))
async def cb_purpose(call: types.CallbackQuery, engine: WorkflowEngine, executor: IntentExecutor):
    key = call.data.split(":", 1)[1]
    # сначала движок: callback не должен обгонять следующее сообщение беседы
    await dispatch(PurposeChosen(call.message.chat.id, key), engine, executor, call=call)
    await call.answer()


@router.callback_query(F.data.startswith("tag:"))
async def cb_tag(call: types.CallbackQuery, engine: WorkflowEngine, executor: IntentExecutor):
    tag = call.data.split(":", 1)[1]
    await dispatch(TagToggled(call.message.chat.id, tag), engine, executor, call=call)
    await call.answer()


@router.callback_query(F.data.startswith("retract:"))
async def cb_retract(call: types.CallbackQuery, engine: WorkflowEngine, executor: IntentExecutor):
    token = call.data.split(":", 1)[1]
    await dispatch(RetractInvoked(call.message.chat.id, token), engine, executor, call=call)

    # удаление best-effort: пользователь всегда видит успех
    await call.answer(RETRACTED_TEXT)
    try:
        await call.message.edit_text(RETRACTED_TEXT)
    except Exception as e:
        logger.debug("confirmation edit skipped: %s", e)
