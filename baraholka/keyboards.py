from aiogram.types import (
    ReplyKeyboardMarkup, KeyboardButton,
    InlineKeyboardMarkup, InlineKeyboardButton
)

from .draft import Purpose

NEW_LISTING_TEXT = "Новое объявление"
PUBLISH_TEXT = "Опубликовать"

TAGS_PER_ROW = 3

# --------------------------------------------------------------------------- #
#                             кнопки под полем ввода                          #
# --------------------------------------------------------------------------- #

def default_keyboard() -> ReplyKeyboardMarkup:
    row = [KeyboardButton(text=NEW_LISTING_TEXT), KeyboardButton(text=PUBLISH_TEXT)]
    return ReplyKeyboardMarkup(keyboard=[row], resize_keyboard=True)


# --------------------------------------------------------------------------- #
#                                цель объявления                              #
# --------------------------------------------------------------------------- #

def purpose_kb() -> InlineKeyboardMarkup:
    def btn(p: Purpose) -> InlineKeyboardButton:
        return InlineKeyboardButton(text=p.label, callback_data=f"purpose:{p.value}")

    row1 = [btn(Purpose.BUY_SELL), btn(Purpose.GIVE_AWAY)]
    row2 = [btn(Purpose.RENT), btn(Purpose.JUST_ASK)]
    return InlineKeyboardMarkup(inline_keyboard=[row1, row2])


# --------------------------------------------------------------------------- #
#                      теги: мультивыбор с галочками                          #
# --------------------------------------------------------------------------- #

def tag_kb(catalog, selected) -> InlineKeyboardMarkup:
    """
    Все теги каталога по три в ряд; выбранные отмечены ✅, остальные ☑️.
    """
    rows: list[list[InlineKeyboardButton]] = []
    row: list[InlineKeyboardButton] = []
    for tag in catalog:
        mark = "✅" if tag in selected else "☑️"
        row.append(InlineKeyboardButton(text=f"{mark} {tag}", callback_data=f"tag:{tag}"))
        if len(row) == TAGS_PER_ROW:
            rows.append(row)
            row = []
    if row:
        rows.append(row)
    return InlineKeyboardMarkup(inline_keyboard=rows)


# --------------------------------------------------------------------------- #
#                         удаление опубликованного                           #
# --------------------------------------------------------------------------- #

def retract_kb(token: str) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="🗑 Удалить объявление", callback_data=f"retract:{token}")]
    ])
