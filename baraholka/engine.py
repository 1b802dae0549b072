"""
Машина состояний подачи объявления.

Движок получает входящее событие, под замком беседы читает и меняет
черновик и возвращает намерения для транспорта. Стадия нигде не хранится:
она каждый раз вычисляется из черновика (см. draft.stage_of).
"""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional, Protocol

from .draft import Draft, Price, Purpose, Stage, stage_of
from .intents import (
    ConfirmPublished,
    Event,
    Intent,
    KeyboardUpdated,
    NewListingRequested,
    PhotoReceived,
    Prompt,
    PublishedRecord,
    PublishRequested,
    PublishToChannel,
    PurposeChosen,
    RetractInvoked,
    RetractRequested,
    TagToggled,
    TextReceived,
    ValidationError,
)
from .keyboards import default_keyboard, purpose_kb, retract_kb, tag_kb
from .listing import compose_listing_text, parse_price
from .storage import RetractionRegistry, SessionStore, TagCatalog

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
#                                   тексты                                    #
# --------------------------------------------------------------------------- #

WELCOME_TEXT = (
    "Приветствуем в барахолке Discovery!\n"
    "Чтобы подать объявление, нажмите «Новое объявление»."
)
PURPOSE_PROMPT = "Укажите цель объявления"
PRICE_PROMPT = "Назовите свою цену (число) в рублях"
CONTENT_PROMPT = (
    "Пришлите описание объявления, приложите изображения (если есть) "
    "и укажите теги из списка ниже:"
)
PRICE_INVALID = "Необходимо ввести положительное число"
TOO_MANY_IMAGES = "Вы не можете добавить больше изображений"
UPDATED_TEXT = "Информация обновлена"
NOT_SUBSCRIBED = "Чтобы опубликовать объявление, подпишитесь на канал"
WINDOW_CLOSED = "Публикация объявлений доступна с {hour}:00 до конца дня"
PUBLISHED_TEXT = "Объявление опубликовано!"
RETRACTED_TEXT = "Объявление удалено"
FAILURE_TEXT = "Не удалось выполнить действие, попробуйте ещё раз"

# статусы участника канала, с которыми публиковать нельзя
BLOCKED_STATUSES = frozenset({"left", "kicked", "restricted"})

PUBLISH_FROM_HOUR = 9


class CollaboratorFailure(Exception):
    """Внешний вызов (проверка подписки, публикация) завершился ошибкой."""


class ChannelPublisher(Protocol):
    async def publish(self, post: PublishToChannel) -> PublishedRecord: ...


MembershipLookup = Callable[[int], Awaitable[str]]
ClockHour = Callable[[], int]


class WorkflowEngine:
    def __init__(
        self,
        store: SessionStore,
        catalog: TagCatalog,
        publisher: ChannelPublisher,
        *,
        membership: Optional[MembershipLookup] = None,
        clock: Optional[ClockHour] = None,
        publish_from_hour: int = PUBLISH_FROM_HOUR,
        retractions: Optional[RetractionRegistry] = None,
    ) -> None:
        self.store = store
        self.catalog = catalog
        self.publisher = publisher
        self.membership = membership
        self.clock = clock
        self.publish_from_hour = publish_from_hour
        self.retractions = retractions if retractions is not None else RetractionRegistry()

    async def handle(self, event: Event) -> list[Intent]:
        async with self.store.transaction(event.conversation_id) as draft:
            if isinstance(event, NewListingRequested):
                draft = self.store.reset(event.conversation_id)
                return [self.stage_prompt(event.conversation_id, draft)]
            if isinstance(event, PurposeChosen):
                return self._on_purpose(event, draft)
            if isinstance(event, TagToggled):
                return self._on_tag(event, draft)
            if isinstance(event, TextReceived):
                return self._on_text(event, draft)
            if isinstance(event, PhotoReceived):
                return self._on_photo(event, draft)
            if isinstance(event, PublishRequested):
                return await self._on_publish(event, draft)
            if isinstance(event, RetractInvoked):
                return self._on_retract(event)
        raise TypeError(f"unsupported event: {event!r}")

    # ------------------------------------------------------------------ #

    def stage_prompt(self, cid: int, draft: Draft) -> Prompt:
        stage = stage_of(draft)
        if stage is Stage.CHOOSING_PURPOSE:
            return Prompt(cid, PURPOSE_PROMPT, purpose_kb())
        if stage is Stage.ENTERING_PRICE:
            return Prompt(cid, PRICE_PROMPT)
        return Prompt(cid, CONTENT_PROMPT, tag_kb(self.catalog, draft.tags))

    def _on_purpose(self, event: PurposeChosen, draft: Draft) -> list[Intent]:
        purpose = Purpose.from_key(event.purpose_key)
        if purpose is None:
            logger.warning("unknown purpose %r from %s", event.purpose_key, event.conversation_id)
            return []
        draft.choose_purpose(purpose)
        return [self.stage_prompt(event.conversation_id, draft)]

    def _on_tag(self, event: TagToggled, draft: Draft) -> list[Intent]:
        # теги доступны сразу после выбора цели, независимо от стадии
        if draft.purpose is None or event.tag_key not in self.catalog:
            return []
        draft.toggle_tag(event.tag_key)
        return [KeyboardUpdated(event.conversation_id, tag_kb(self.catalog, draft.tags))]

    def _on_text(self, event: TextReceived, draft: Draft) -> list[Intent]:
        cid = event.conversation_id
        stage = stage_of(draft)

        if stage is Stage.CHOOSING_PURPOSE:
            return [self.stage_prompt(cid, draft)]

        if stage is Stage.ENTERING_PRICE:
            price = parse_price(event.text)
            if price is None:
                return [ValidationError(cid, PRICE_INVALID, reply_to=event.message_id)]
            draft.price = Price.of(price)
            return [self.stage_prompt(cid, draft)]

        if event.text:
            draft.name = event.text
        return [Prompt(cid, UPDATED_TEXT, default_keyboard())]

    def _on_photo(self, event: PhotoReceived, draft: Draft) -> list[Intent]:
        cid = event.conversation_id
        stage = stage_of(draft)

        if stage is Stage.CHOOSING_PURPOSE:
            return [self.stage_prompt(cid, draft)]
        if stage is Stage.ENTERING_PRICE:
            return [ValidationError(cid, PRICE_INVALID, reply_to=event.message_id)]

        if not draft.add_image(event.file_ref):
            return [ValidationError(cid, TOO_MANY_IMAGES, reply_to=event.message_id)]
        if event.caption:
            draft.name = event.caption
        return [Prompt(cid, UPDATED_TEXT, default_keyboard())]

    # ------------------------------------------------------------------ #
    #                              публикация                            #
    # ------------------------------------------------------------------ #

    async def _on_publish(self, event: PublishRequested, draft: Draft) -> list[Intent]:
        cid = event.conversation_id

        if self.membership is not None:
            try:
                status = await self.membership(event.identity.user_id)
            except Exception as exc:
                raise CollaboratorFailure("membership lookup failed") from exc
            if str(status).lower() in BLOCKED_STATUSES:
                return [Prompt(cid, NOT_SUBSCRIBED)]

        if self.clock is not None and self.clock() < self.publish_from_hour:
            return [Prompt(cid, WINDOW_CLOSED.format(hour=self.publish_from_hour))]

        if not draft.is_complete():
            return [self.stage_prompt(cid, draft)]

        post = PublishToChannel(
            text=compose_listing_text(draft, event.identity),
            images=tuple(draft.images),
        )
        try:
            record = await self.publisher.publish(post)
        except Exception as exc:
            raise CollaboratorFailure("channel post failed") from exc

        logger.info("listing from %s published as %s", cid, list(record.message_ids))
        try:
            token = self.retractions.bind(record)
        finally:
            self.store.reset(cid)
        return [ConfirmPublished(cid, record.link, retract_kb(token))]

    def _on_retract(self, event: RetractInvoked) -> list[Intent]:
        record = self.retractions.pop(event.token)
        if record is None:
            return []
        return [RetractRequested(record.chat_id, record.message_ids)]
