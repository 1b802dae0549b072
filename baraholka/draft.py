"""
Черновик объявления и производная от него стадия диалога.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Сколько фото помещается в одну медиагруппу Telegram
MAX_IMAGES = 10


# --------------------------------------------------------------------------- #
#                               Цель объявления                               #
# --------------------------------------------------------------------------- #

class Purpose(str, Enum):
    # значение = ключ в callback_data и хэштег в канале
    BUY_SELL = "КуплюПродам"
    GIVE_AWAY = "ОтдамБесплатно"
    RENT = "СдамСниму"
    JUST_ASK = "ПростоCпросить"

    @property
    def label(self) -> str:
        return PURPOSE_LABELS[self]

    @property
    def is_free(self) -> bool:
        return self in FREE_PURPOSES

    @classmethod
    def from_key(cls, key: str) -> Purpose | None:
        try:
            return cls(key)
        except ValueError:
            return None


PURPOSE_LABELS: dict[Purpose, str] = {
    Purpose.BUY_SELL: "Куплю / Продам",
    Purpose.GIVE_AWAY: "Отдам бесплатно",
    Purpose.RENT: "Сдам / Сниму",
    Purpose.JUST_ASK: "Просто спросить",
}

FREE_PURPOSES = frozenset({Purpose.GIVE_AWAY, Purpose.JUST_ASK})


# --------------------------------------------------------------------------- #
#                                    Цена                                     #
# --------------------------------------------------------------------------- #

class PriceKind(str, Enum):
    UNSET = "unset"
    AWAITING = "awaiting"
    FREE = "free"
    AMOUNT = "amount"


@dataclass(frozen=True)
class Price:
    kind: PriceKind = PriceKind.UNSET
    amount: int = 0

    @classmethod
    def awaiting(cls) -> Price:
        return cls(PriceKind.AWAITING)

    @classmethod
    def free(cls) -> Price:
        return cls(PriceKind.FREE)

    @classmethod
    def of(cls, amount: int) -> Price:
        if amount < 1:
            raise ValueError(f"price must be positive, got {amount}")
        return cls(PriceKind.AMOUNT, amount)

    @property
    def resolved(self) -> bool:
        return self.kind in (PriceKind.FREE, PriceKind.AMOUNT)

    @property
    def legacy(self) -> int | None:
        """Старое целочисленное представление: None / 0 / -1 / сумма."""
        if self.kind is PriceKind.UNSET:
            return None
        if self.kind is PriceKind.AWAITING:
            return 0
        if self.kind is PriceKind.FREE:
            return -1
        return self.amount


# --------------------------------------------------------------------------- #
#                                  Черновик                                   #
# --------------------------------------------------------------------------- #

@dataclass
class Draft:
    purpose: Purpose | None = None
    price: Price = field(default_factory=Price)
    name: str | None = None
    tags: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)

    def choose_purpose(self, purpose: Purpose) -> None:
        self.purpose = purpose
        self.price = Price.free() if purpose.is_free else Price.awaiting()

    def toggle_tag(self, tag: str) -> bool:
        """Переключает тег; возвращает True, если тег теперь выбран."""
        if tag in self.tags:
            self.tags.remove(tag)
            return False
        self.tags.append(tag)
        return True

    def add_image(self, file_ref: str) -> bool:
        if len(self.images) >= MAX_IMAGES:
            return False
        self.images.append(file_ref)
        return True

    def is_complete(self) -> bool:
        return self.purpose is not None and self.price.resolved and bool(self.name)


# --------------------------------------------------------------------------- #
#                                   Стадии                                    #
# --------------------------------------------------------------------------- #

class Stage(str, Enum):
    CHOOSING_PURPOSE = "choosing_purpose"
    ENTERING_PRICE = "entering_price"
    COLLECTING = "collecting"


def stage_of(draft: Draft) -> Stage:
    # стадия не хранится, а вычисляется из заполненных полей
    if draft.purpose is None or draft.price.kind is PriceKind.UNSET:
        return Stage.CHOOSING_PURPOSE
    if draft.price.kind is PriceKind.AWAITING:
        return Stage.ENTERING_PRICE
    return Stage.COLLECTING
