"""Tests for UpdateProcessor."""

import asyncio

import pytest

from chatflow.errors import NotStartedError, TransportError
from chatflow.models import AwaitingLanguage, CallbackQuery, Start, TextMessage
from chatflow.processor import UpdateProcessor

CHAT = 3


def text(body, sender_id=501):
    return TextMessage(conversation_id=CHAT, sender_id=sender_id, text=body)


class TestUpdateProcessorHandle:
    """Tests for UpdateProcessor.handle()."""

    async def test_text_goes_to_dialogue(self, processor, storage):
        """Test that ordinary text drives the dialogue."""
        state = await processor.handle(text("/start"))
        assert state == AwaitingLanguage(fresh=True)
        assert await storage.get(CHAT) == state

    async def test_commands_are_intercepted(self, processor, storage, gateway):
        """Test that a known command never reaches the dialogue."""
        assert await processor.handle(text("/help")) is None
        assert await storage.get(CHAT) == Start()
        assert len(gateway.calls) == 1

    async def test_admin_command_from_user_reaches_dialogue(self, processor, storage):
        """Test that an unauthorized /reset is ordinary text."""
        state = await processor.handle(text("/reset"))
        assert state == AwaitingLanguage(fresh=True)

    async def test_admin_reset_then_restart(self, processor, storage, admin_id):
        """Test that after an admin reset the dialogue starts over."""
        await processor.handle(text("/start"))
        assert await processor.handle(text("/reset", sender_id=admin_id)) is None
        assert await storage.get(CHAT) == Start()

    async def test_callbacks_skip_commands(self, processor, storage):
        """Test that callbacks go straight to the router."""
        await processor.handle(text("/start"))
        press = CallbackQuery(
            conversation_id=CHAT, sender_id=501, origin_message_id=100, payload="EN"
        )
        state = await processor.handle(press)
        assert state.language.value == "EN"

    async def test_transport_error_propagates(self, processor, storage, gateway):
        """Test that render failures reach the caller and commit nothing."""
        gateway.fail_on = {"send"}
        with pytest.raises(TransportError):
            await processor.handle(text("/start"))
        assert await storage.get(CHAT) == Start()

    async def test_handle_when_not_started(self, router, commands):
        """Test that handle raises before start()."""
        up = UpdateProcessor(router, commands)
        with pytest.raises(NotStartedError, match="not started"):
            await up.handle(text("hi"))


class TestUpdateProcessorStop:
    """Tests for graceful shutdown."""

    async def test_stop_waits_for_inflight_updates(self, router, commands, storage, gateway):
        """Test that stop() lets running transitions commit."""
        up = UpdateProcessor(router, commands)
        await up.start()
        gateway.delay = 0.05

        task = asyncio.create_task(up.handle(text("/start")))
        await asyncio.sleep(0.01)
        await up.stop()

        assert task.done()
        assert await storage.get(CHAT) == AwaitingLanguage(fresh=True)

    async def test_stop_rejects_new_updates(self, router, commands):
        """Test that updates after stop() are refused."""
        up = UpdateProcessor(router, commands)
        await up.start()
        await up.stop()

        assert up.running is False
        with pytest.raises(NotStartedError):
            await up.handle(text("hi"))
