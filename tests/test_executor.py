from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiogram.enums import ChatMemberStatus

from baraholka.engine import PUBLISHED_TEXT
from baraholka.handlers.executor import IntentExecutor, message_link
from baraholka.handlers.membership import ChatMemberLookup
from baraholka.intents import (
    ConfirmPublished,
    KeyboardUpdated,
    Prompt,
    PublishToChannel,
    RetractRequested,
    ValidationError,
)
from baraholka.keyboards import retract_kb, tag_kb

CHANNEL = "@baraholka_test"


def _msg(message_id, chat_id=-1001234567890, username="baraholka_test"):
    return SimpleNamespace(
        message_id=message_id,
        chat=SimpleNamespace(id=chat_id, username=username),
    )


@pytest.fixture
def bot():
    return AsyncMock()


@pytest.fixture
def executor(bot):
    return IntentExecutor(bot, CHANNEL)


def test_message_link():
    assert message_link(_msg(1).chat, 5) == "https://t.me/baraholka_test/5"
    private = SimpleNamespace(id=-1001234567890, username=None)
    assert message_link(private, 5) == "https://t.me/c/1234567890/5"


class TestPublish:
    @pytest.mark.asyncio
    async def test_text_post(self, executor, bot):
        bot.send_message.return_value = _msg(77)

        record = await executor.publish(PublishToChannel(text="hello"))

        bot.send_message.assert_awaited_once_with(CHANNEL, "hello", parse_mode="Markdown")
        assert record.message_ids == (77,)
        assert record.link == "https://t.me/baraholka_test/77"

    @pytest.mark.asyncio
    async def test_media_group_caption_on_first_only(self, executor, bot):
        bot.send_media_group.return_value = [_msg(10), _msg(11), _msg(12)]

        record = await executor.publish(PublishToChannel(text="caption", images=("a", "b", "c")))

        chat, media = bot.send_media_group.await_args.args
        assert chat == CHANNEL
        assert [m.media for m in media] == ["a", "b", "c"]
        assert media[0].caption == "caption"
        assert media[1].caption is None and media[2].caption is None
        assert record.message_ids == (10, 11, 12)
        assert record.link.endswith("/10")


class TestRetract:
    @pytest.mark.asyncio
    async def test_batch_delete(self, executor, bot):
        outcome = await executor.retract(RetractRequested(-100, (1, 2, 3)))
        bot.delete_messages.assert_awaited_once_with(-100, [1, 2, 3])
        assert outcome.ok

    @pytest.mark.asyncio
    async def test_failure_is_reported_not_raised(self, executor, bot):
        bot.delete_messages.side_effect = RuntimeError("message can't be deleted")
        outcome = await executor.retract(RetractRequested(-100, (1, 2)))
        assert not outcome.ok
        assert "can't be deleted" in outcome.error

    @pytest.mark.asyncio
    async def test_run_swallows_retract_failure(self, executor, bot):
        bot.delete_messages.side_effect = RuntimeError("boom")
        await executor.run([RetractRequested(-100, (1,))])


class TestRun:
    @pytest.mark.asyncio
    async def test_prompt_and_validation(self, executor, bot):
        await executor.run([
            Prompt(5, "hi"),
            ValidationError(5, "bad", reply_to=9),
        ])
        first, second = bot.send_message.await_args_list
        assert first.args == (5, "hi")
        assert second.kwargs["reply_parameters"].message_id == 9

    @pytest.mark.asyncio
    async def test_keyboard_update_edits_source_message(self, executor, catalog):
        call = MagicMock()
        call.message.edit_reply_markup = AsyncMock()
        kb = tag_kb(catalog, [])

        await executor.run([KeyboardUpdated(5, kb)], call=call)

        call.message.edit_reply_markup.assert_awaited_once_with(reply_markup=kb)

    @pytest.mark.asyncio
    async def test_confirm_published(self, executor, bot):
        kb = retract_kb("tok")
        await executor.run([ConfirmPublished(5, "https://t.me/x/1", kb)])
        args, kwargs = bot.send_message.await_args
        assert args == (5, f"{PUBLISHED_TEXT}\nhttps://t.me/x/1")
        assert kwargs["reply_markup"] is kb


class TestMembership:
    @pytest.mark.asyncio
    async def test_enum_status_normalized(self, bot):
        bot.get_chat_member.return_value = SimpleNamespace(status=ChatMemberStatus.LEFT)
        lookup = ChatMemberLookup(bot, CHANNEL)

        assert await lookup(42) == "left"
        bot.get_chat_member.assert_awaited_once_with(CHANNEL, 42)

    @pytest.mark.asyncio
    async def test_errors_propagate(self, bot):
        bot.get_chat_member.side_effect = RuntimeError("chat not found")
        with pytest.raises(RuntimeError):
            await ChatMemberLookup(bot, CHANNEL)(42)


@pytest.mark.asyncio
async def test_publish_intent_is_not_run_directly(executor, bot):
    # публикацию выполняет движок через executor.publish, не через run()
    with pytest.raises(TypeError):
        await executor.run([PublishToChannel(text="hello")])
    bot.send_message.assert_not_awaited()
