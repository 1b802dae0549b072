from unittest.mock import AsyncMock

import pytest

from baraholka.engine import WorkflowEngine
from baraholka.intents import Identity, PublishedRecord
from baraholka.storage import SessionStore, TagCatalog

CHANNEL_ID = -1001234567890


@pytest.fixture
def catalog() -> TagCatalog:
    return TagCatalog.from_lines(["Электроника", "Мебель", "Д", "Книги", ""])


@pytest.fixture
def store() -> SessionStore:
    return SessionStore()


@pytest.fixture
def publisher() -> AsyncMock:
    pub = AsyncMock()
    pub.publish.return_value = PublishedRecord(
        chat_id=CHANNEL_ID,
        message_ids=(501,),
        link="https://t.me/c/1234567890/501",
    )
    return pub


@pytest.fixture
def engine(store, catalog, publisher) -> WorkflowEngine:
    return WorkflowEngine(store, catalog, publisher)


@pytest.fixture
def ivan() -> Identity:
    return Identity(user_id=42, first_name="Ivan", last_name="Petrov")
