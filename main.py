import asyncio
import logging

from aiohttp import web
from aiogram.types import BotCommand

from baraholka.config import SETTINGS, build_bot_and_dispatcher, clock_hour
from baraholka.engine import WorkflowEngine
from baraholka.handlers import router as root_router
from baraholka.handlers.executor import IntentExecutor
from baraholka.handlers.membership import ChatMemberLookup
from baraholka.storage import SessionStore, TagCatalog

logger = logging.getLogger("baraholka")

COMMANDS = [
    BotCommand(command="start", description="Начать диалог"),
    BotCommand(command="create", description="Новое объявление"),
    BotCommand(command="publish", description="Опубликовать"),
]


async def main():
    logging.basicConfig(
        level=SETTINGS.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not SETTINGS.CHANNEL:
        raise RuntimeError("CHANNEL не задан в .env")

    catalog = TagCatalog.from_file(SETTINGS.TAGS_FILE)
    bot, dp = build_bot_and_dispatcher()

    executor = IntentExecutor(bot, SETTINGS.CHANNEL)
    engine = WorkflowEngine(
        SessionStore(),
        catalog,
        executor,
        membership=ChatMemberLookup(bot, SETTINGS.CHANNEL),
        clock=clock_hour(SETTINGS),
        publish_from_hour=SETTINGS.PUBLISH_FROM_HOUR,
    )
    # попадают в хендлеры как аргументы engine / executor
    dp["engine"] = engine
    dp["executor"] = executor
    dp.include_router(root_router)

    await bot.set_my_commands(COMMANDS)
    logger.info("loaded %d tags, publishing to %s", len(catalog), SETTINGS.CHANNEL)

    # ------------------------------------------------------------------ #
    asyncio.create_task(dp.start_polling(bot))

    async def healthcheck(_):
        return web.Response(text="Bot is running!")

    app = web.Application()
    app.router.add_get("/", healthcheck)

    runner = web.AppRunner(app)
    await runner.setup()
    await web.TCPSite(runner, "0.0.0.0", SETTINGS.PORT).start()
    logger.info("HTTP server started on 0.0.0.0:%d", SETTINGS.PORT)

    while True:
        await asyncio.sleep(3600)


if __name__ == "__main__":
    asyncio.run(main())
