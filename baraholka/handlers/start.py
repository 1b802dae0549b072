from aiogram import Router, types
from aiogram.filters import CommandStart

from ..engine import WELCOME_TEXT, WorkflowEngine
from ..keyboards import default_keyboard

router = Router()


@router.message(CommandStart())
async def on_start(message: types.Message, engine: WorkflowEngine):
    # черновик заводится при первом контакте
    engine.store.get(message.chat.id)
    await message.answer(WELCOME_TEXT, reply_markup=default_keyboard())
