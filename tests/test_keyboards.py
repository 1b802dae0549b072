from baraholka.keyboards import default_keyboard, purpose_kb, retract_kb, tag_kb


def _texts(markup):
    return [[b.text for b in row] for row in markup.inline_keyboard]


def test_purpose_kb():
    kb = purpose_kb()
    data = [b.callback_data for row in kb.inline_keyboard for b in row]
    assert data == [
        "purpose:КуплюПродам",
        "purpose:ОтдамБесплатно",
        "purpose:СдамСниму",
        "purpose:ПростоCпросить",
    ]
    assert _texts(kb)[0] == ["Куплю / Продам", "Отдам бесплатно"]


def test_tag_kb_rows_and_marks(catalog):
    kb = tag_kb(catalog, ["Д"])
    assert _texts(kb) == [
        ["☑️ Электроника", "☑️ Мебель", "✅ Д"],
        ["☑️ Книги"],
    ]
    assert kb.inline_keyboard[0][2].callback_data == "tag:Д"


def test_retract_kb():
    kb = retract_kb("abc")
    assert kb.inline_keyboard[0][0].callback_data == "retract:abc"


def test_default_keyboard():
    kb = default_keyboard()
    assert [b.text for b in kb.keyboard[0]] == ["Новое объявление", "Опубликовать"]
    assert kb.resize_keyboard
