"""
Входящие события от транспорта и исходящие намерения для него.

Движок не вызывает Bot API сам: он получает событие и возвращает список
намерений, которые выполняет слой handlers.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from aiogram.types import InlineKeyboardMarkup, ReplyKeyboardMarkup

Markup = Union[InlineKeyboardMarkup, ReplyKeyboardMarkup]


@dataclass(frozen=True)
class Identity:
    user_id: int
    first_name: str = ""
    last_name: str = ""


# --------------------------------------------------------------------------- #
#                              входящие события                               #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class TextReceived:
    conversation_id: int
    text: str
    message_id: int | None = None


@dataclass(frozen=True)
class PhotoReceived:
    conversation_id: int
    file_ref: str
    caption: str | None = None
    message_id: int | None = None


@dataclass(frozen=True)
class PurposeChosen:
    conversation_id: int
    purpose_key: str


@dataclass(frozen=True)
class TagToggled:
    conversation_id: int
    tag_key: str


@dataclass(frozen=True)
class NewListingRequested:
    conversation_id: int


@dataclass(frozen=True)
class PublishRequested:
    conversation_id: int
    identity: Identity


@dataclass(frozen=True)
class RetractInvoked:
    conversation_id: int
    token: str


Event = Union[
    TextReceived,
    PhotoReceived,
    PurposeChosen,
    TagToggled,
    NewListingRequested,
    PublishRequested,
    RetractInvoked,
]


# --------------------------------------------------------------------------- #
#                            исходящие намерения                              #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class Prompt:
    conversation_id: int
    text: str
    keyboard: Markup | None = None


@dataclass(frozen=True)
class ValidationError:
    conversation_id: int
    text: str
    reply_to: int | None = None


@dataclass(frozen=True)
class KeyboardUpdated:
    conversation_id: int
    keyboard: InlineKeyboardMarkup


@dataclass(frozen=True)
class PublishToChannel:
    text: str
    images: tuple[str, ...] = ()

    @property
    def is_media_group(self) -> bool:
        return bool(self.images)


@dataclass(frozen=True)
class PublishedRecord:
    chat_id: int | str
    message_ids: tuple[int, ...]
    link: str = ""


@dataclass(frozen=True)
class ConfirmPublished:
    conversation_id: int
    link: str
    retract_control: InlineKeyboardMarkup


@dataclass(frozen=True)
class RetractRequested:
    chat_id: int | str
    message_ids: tuple[int, ...] = field(default_factory=tuple)


Intent = Union[
    Prompt,
    ValidationError,
    KeyboardUpdated,
    PublishToChannel,
    ConfirmPublished,
    RetractRequested,
]
