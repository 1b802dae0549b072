from aiogram import Bot

# --------------------------------------------------------------------------- #
#                       статус пользователя в канале                          #
# --------------------------------------------------------------------------- #

class ChatMemberLookup:
    """
    Статус участника канала публикации: "member", "left", "kicked", ...
    Ошибки Bot API не глотаются: движок превращает их в отказ операции.
    """

    def __init__(self, bot: Bot, channel: int | str) -> None:
        self.bot = bot
        self.channel = channel

    async def __call__(self, user_id: int) -> str:
        cm = await self.bot.get_chat_member(self.channel, user_id)
        status = getattr(cm, "status", "")
        return str(getattr(status, "value", status)).lower()
