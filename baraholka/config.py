import os
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from dotenv import load_dotenv
from aiogram import Bot, Dispatcher
from aiogram.client.session.aiohttp import AiohttpSession

load_dotenv()


def parse_channel(raw: str) -> int | str:
    """'@name' остаётся строкой, '-100123' становится числом."""
    raw = (raw or "").strip()
    if raw.lstrip("-").isdigit():
        return int(raw)
    return raw


@dataclass(frozen=True)
class Settings:
    BOT_TOKEN: str = (os.getenv("BOT_TOKEN") or "").strip()
    # канал, куда публикуются объявления
    CHANNEL: int | str = parse_channel(os.getenv("CHANNEL") or "")
    PROXY_URL: str = (os.getenv("PROXY_URL") or "").strip()
    TAGS_FILE: str = (os.getenv("TAGS_FILE") or "tags-list.txt").strip()
    PUBLISH_FROM_HOUR: int = int(os.getenv("PUBLISH_FROM_HOUR", "9") or "9")
    # пусто = локальное время процесса
    TIMEZONE: str = (os.getenv("TIMEZONE") or "").strip()
    PORT: int = int(os.getenv("PORT", "8080") or "8080")
    LOG_LEVEL: str = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()

SETTINGS = Settings()


def clock_hour(settings: Settings = SETTINGS):
    tz = ZoneInfo(settings.TIMEZONE) if settings.TIMEZONE else None

    def hour() -> int:
        return datetime.now(tz).hour

    return hour


def build_bot_and_dispatcher():
    if not SETTINGS.BOT_TOKEN:
        raise RuntimeError("BOT_TOKEN не задан в .env")
    session = AiohttpSession(proxy=SETTINGS.PROXY_URL) if SETTINGS.PROXY_URL else None
    bot = Bot(SETTINGS.BOT_TOKEN, session=session)
    dp = Dispatcher()
    return bot, dp
