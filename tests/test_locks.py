"""Tests for ConversationLocks."""

import asyncio

from chatflow.dialogue import ConversationLocks


class TestConversationLocks:
    """Tests for per-conversation mutual exclusion."""

    async def test_same_conversation_is_serialized(self):
        """Test that two holders of one id never overlap."""
        locks = ConversationLocks()
        log = []

        async def worker(name):
            async with locks.hold(1):
                log.append(f"{name}-in")
                await asyncio.sleep(0.01)
                log.append(f"{name}-out")

        await asyncio.gather(worker("a"), worker("b"))

        assert log in (
            ["a-in", "a-out", "b-in", "b-out"],
            ["b-in", "b-out", "a-in", "a-out"],
        )

    async def test_different_conversations_run_concurrently(self):
        """Test that distinct ids do not block each other."""
        locks = ConversationLocks()
        inside = asyncio.Event()
        release = asyncio.Event()

        async def holder():
            async with locks.hold(1):
                inside.set()
                await release.wait()

        task = asyncio.create_task(holder())
        await inside.wait()

        async with locks.hold(2):
            entered_other = True

        release.set()
        await task
        assert entered_other

    async def test_idle_locks_are_dropped(self):
        """Test that the map does not grow with finished conversations."""
        locks = ConversationLocks()
        async with locks.hold(1):
            assert len(locks) == 1
        assert len(locks) == 0

    async def test_lock_released_on_error(self):
        """Test that an exception inside the block releases the lock."""
        locks = ConversationLocks()
        try:
            async with locks.hold(1):
                raise ValueError("boom")
        except ValueError:
            pass

        await asyncio.wait_for(_enter(locks, 1), timeout=1)
        assert len(locks) == 0


async def _enter(locks, conversation_id):
    async with locks.hold(conversation_id):
        return True
