from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, TypeVar

from ..draft import Draft

T = TypeVar("T")


class SessionStore:
    """
    Черновики в памяти процесса: один на беседу.

    События одной беседы обрабатываются строго по очереди через отдельный
    asyncio.Lock; разные беседы друг друга не ждут.
    """

    def __init__(self) -> None:
        self._drafts: dict[int, Draft] = {}
        self._locks: dict[int, asyncio.Lock] = {}

    def get(self, conversation_id: int) -> Draft:
        draft = self._drafts.get(conversation_id)
        if draft is None:
            draft = self._drafts[conversation_id] = Draft()
        return draft

    def reset(self, conversation_id: int) -> Draft:
        draft = self._drafts[conversation_id] = Draft()
        return draft

    def lock(self, conversation_id: int) -> asyncio.Lock:
        lock = self._locks.get(conversation_id)
        if lock is None:
            lock = self._locks[conversation_id] = asyncio.Lock()
        return lock

    @asynccontextmanager
    async def transaction(self, conversation_id: int) -> AsyncIterator[Draft]:
        async with self.lock(conversation_id):
            yield self.get(conversation_id)

    async def mutate(self, conversation_id: int, fn: Callable[[Draft], T]) -> T:
        async with self.transaction(conversation_id) as draft:
            return fn(draft)

    def __contains__(self, conversation_id: int) -> bool:
        return conversation_id in self._drafts

    def __len__(self) -> int:
        return len(self._drafts)
