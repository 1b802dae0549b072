from __future__ import annotations
from collections import OrderedDict
from uuid import uuid4

from ..intents import PublishedRecord

# сколько последних публикаций можно удалить кнопкой
MAX_PENDING = 1000


class RetractionRegistry:
    """
    Кнопка «удалить» несёт только короткий токен: все id медиагруппы
    в 64 байта callback_data не помещаются.

    Хранятся только последние `limit` публикаций; у более старых кнопка
    ничего не удаляет.
    """

    def __init__(self, limit: int = MAX_PENDING) -> None:
        self.limit = limit
        self._pending: OrderedDict[str, PublishedRecord] = OrderedDict()

    def bind(self, record: PublishedRecord) -> str:
        token = uuid4().hex
        self._pending[token] = record
        while len(self._pending) > self.limit:
            self._pending.popitem(last=False)
        return token

    def pop(self, token: str) -> PublishedRecord | None:
        return self._pending.pop(token, None)

    def __len__(self) -> int:
        return len(self._pending)
