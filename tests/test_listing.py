import pytest

from baraholka.draft import Draft, Price, Purpose
from baraholka.intents import Identity
from baraholka.listing import author_link, compose_listing_text, format_rub, parse_price


@pytest.mark.parametrize(
    "num, expected",
    [
        (5, "5"),
        (999, "999"),
        (5000, "5\u00a0000"),
        (1250000, "1\u00a0250\u00a0000"),
    ],
)
def test_format_rub(num, expected):
    assert format_rub(num) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("500", 500),
        ("  500 ", 500),
        ("15 000", 15000),
        ("15\u00a0000", 15000),
        ("700 руб", 700),
        ("1.5", 1),
        ("abc", None),
        ("", None),
        (None, None),
        ("0", None),
        ("-3", None),
    ],
)
def test_parse_price(text, expected):
    assert parse_price(text) == expected


def test_author_link_skips_empty_parts():
    assert author_link(Identity(7, "Anna", "")) == "[Anna](tg://user?id=7)"
    assert author_link(Identity(7, "", "Smith")) == "[Smith](tg://user?id=7)"
    assert author_link(Identity(7, "Anna", "Smith")) == "[Anna Smith](tg://user?id=7)"


def test_free_listing_without_price_clause(ivan):
    draft = Draft(name="Looking for a ladder", tags=["Д"])
    draft.choose_purpose(Purpose.JUST_ASK)

    text = compose_listing_text(draft, ivan)

    assert text == (
        "Looking for a ladder\n\n#Д\n\n#ПростоCпросить\n\n"
        "[Ivan Petrov](tg://user?id=42)"
    )


def test_priced_listing(ivan):
    draft = Draft(name="Диван", tags=["Мебель", "Д"])
    draft.choose_purpose(Purpose.BUY_SELL)
    draft.price = Price.of(15000)

    text = compose_listing_text(draft, ivan)

    assert text == (
        "Диван\n\n#Мебель #Д\n\n#КуплюПродам за *15\u00a0000* ₽\n\n"
        "[Ivan Petrov](tg://user?id=42)"
    )


def test_no_tags_no_tag_line(ivan):
    draft = Draft(name="Отдам кота")
    draft.choose_purpose(Purpose.GIVE_AWAY)
    assert compose_listing_text(draft, ivan) == (
        "Отдам кота\n\n#ОтдамБесплатно\n\n[Ivan Petrov](tg://user?id=42)"
    )


def test_composition_is_deterministic(ivan):
    draft = Draft(name="Велосипед", tags=["Спорт"])
    draft.choose_purpose(Purpose.RENT)
    draft.price = Price.of(300)
    assert compose_listing_text(draft, ivan) == compose_listing_text(draft, ivan)


def test_incomplete_draft_rejected(ivan):
    with pytest.raises(ValueError):
        compose_listing_text(Draft(), ivan)
