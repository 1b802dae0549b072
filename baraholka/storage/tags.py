from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)

# лимит Telegram на callback_data
CALLBACK_DATA_LIMIT = 64


class TagCatalog:
    """Неизменяемый упорядоченный список тегов, загружается один раз при старте."""

    def __init__(self, tags: Iterable[str]) -> None:
        self._tags: tuple[str, ...] = tuple(dict.fromkeys(tags))

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> TagCatalog:
        tags: list[str] = []
        for line in lines:
            tag = line.strip()
            if not tag:
                continue
            if len(f"tag:{tag}".encode("utf-8")) > CALLBACK_DATA_LIMIT:
                logger.warning("tag %r is too long for callback data, skipped", tag)
                continue
            tags.append(tag)
        return cls(tags)

    @classmethod
    def from_file(cls, path: str | Path) -> TagCatalog:
        text = Path(path).read_text(encoding="utf-8")
        return cls.from_lines(text.splitlines())

    def __contains__(self, tag: object) -> bool:
        return tag in self._tags

    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __repr__(self) -> str:
        return f"TagCatalog({list(self._tags)!r})"
