"""Pytest configuration and fixtures."""

import asyncio
import itertools

import pytest
import pytest_asyncio

ADMIN_ID = 1000


class RecordingGateway:
    """Render gateway that records calls and hands out increasing message ids."""

    def __init__(self, first_message_id: int = 100):
        self._ids = itertools.count(first_message_id)
        self.calls: list[tuple] = []
        self.fail_on: set[str] = set()
        self.delay = 0.0

    async def _maybe_fail(self, op: str) -> None:
        from chatflow.errors import TransportError

        if self.delay:
            await asyncio.sleep(self.delay)
        if op in self.fail_on:
            raise TransportError(f"{op} failed")

    async def send_text(self, conversation_id, text, keyboard=None):
        await self._maybe_fail("send")
        message_id = next(self._ids)
        self.calls.append(("send", conversation_id, message_id, text, keyboard))
        return message_id

    async def edit_text(self, conversation_id, message_id, text, keyboard=None):
        await self._maybe_fail("edit")
        self.calls.append(("edit", conversation_id, message_id, text, keyboard))
        return message_id

    async def delete_message(self, conversation_id, message_id):
        await self._maybe_fail("delete")
        self.calls.append(("delete", conversation_id, message_id, None, None))

    def ops(self) -> list[str]:
        return [call[0] for call in self.calls]

    def last(self) -> tuple:
        return self.calls[-1]

    def clear(self) -> None:
        self.calls.clear()


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from chatflow.storage import StateStore

    st = StateStore(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def gateway():
    """Create a recording gateway."""
    return RecordingGateway()


@pytest.fixture
def locks():
    """Create the per-conversation lock map."""
    from chatflow.dialogue import ConversationLocks

    return ConversationLocks()


@pytest.fixture
def handlers(gateway):
    """Create step handlers bound to the recording gateway."""
    from chatflow.dialogue import StepHandlers

    return StepHandlers(gateway)


@pytest.fixture
def router(storage, handlers, locks):
    """Create DialogueRouter for testing."""
    from chatflow.dialogue import DialogueRouter

    return DialogueRouter(storage, handlers, locks)


@pytest.fixture
def commands(gateway, storage, locks):
    """Create CommandHandler with a fixed admin."""
    from chatflow.commands import CommandHandler

    return CommandHandler(
        gateway=gateway,
        store=storage,
        locks=locks,
        admin_id=ADMIN_ID,
        bot_username="chatflow_bot",
    )


@pytest_asyncio.fixture
async def processor(router, commands):
    """Create a started UpdateProcessor."""
    from chatflow.processor import UpdateProcessor

    up = UpdateProcessor(router, commands)
    await up.start()
    yield up
    await up.stop()


@pytest.fixture
def admin_id():
    """Principal id of the administrator."""
    return ADMIN_ID
