import re

from .draft import Draft, PriceKind
from .intents import Identity

__all__ = [
    "format_rub",
    "parse_price",
    "author_link",
    "compose_listing_text",
]

NBSP = "\u00a0"

_INT_PREFIX = re.compile(r"[+-]?\d+")


# ---------------------------- helpers ---------------------------------------

def format_rub(num: int) -> str:
    """Разделение разрядов как в ru-RU: 1 250 000 (неразрывный пробел)."""
    return f"{num:,}".replace(",", NBSP)


def parse_price(text: str | None) -> int | None:
    """
    Цена из сообщения пользователя. Разрядные пробелы игнорируются,
    берётся целое число в начале строки:
        "500"       -> 500
        "15 000"    -> 15000
        "700 руб"   -> 700
        "abc", "0"  -> None
    """
    s = (text or "").strip().replace(NBSP, "").replace(" ", "")
    m = _INT_PREFIX.match(s)
    if not m:
        return None
    value = int(m.group(0))
    if value < 1:
        return None
    return value


def author_link(identity: Identity) -> str:
    full_name = " ".join(p for p in (identity.first_name, identity.last_name) if p)
    return f"[{full_name}](tg://user?id={identity.user_id})"


# ---------------------------- текст объявления -------------------------------

def compose_listing_text(draft: Draft, identity: Identity) -> str:
    if draft.purpose is None or not draft.name:
        raise ValueError("draft is not complete")

    text = draft.name
    if draft.tags:
        text += "\n\n" + " ".join(f"#{tag}" for tag in draft.tags)

    text += f"\n\n#{draft.purpose.value}"
    if draft.price.kind is PriceKind.AMOUNT:
        text += f" за *{format_rub(draft.price.amount)}* ₽"

    text += "\n\n" + author_link(identity)
    return text
