"""Tests for StateStore."""

import pytest

from chatflow.errors import StoreError
from chatflow.models import (
    AwaitingMode,
    ConfirmingName,
    Language,
    Mode,
    ModeSelected,
    Profile,
    Start,
)
from chatflow.storage import StateStore


class TestStateStoreInit:
    """Tests for StateStore initialization."""

    async def test_init_creates_table(self, storage):
        """Test that init creates the dialogue_states table."""
        async with storage._conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ) as cursor:
            tables = [row[0] for row in await cursor.fetchall()]
            assert "dialogue_states" in tables

    async def test_use_before_init_raises(self):
        """Test that an unopened store raises StoreError."""
        store = StateStore(":memory:")
        with pytest.raises(StoreError, match="not initialized"):
            await store.get(1)
        with pytest.raises(StoreError, match="not initialized"):
            await store.set(1, Start())


class TestStateStoreAccess:
    """Tests for get/set/reset."""

    async def test_unseen_conversation_is_start(self, storage):
        """Test that get returns Start for an unknown id."""
        assert await storage.get(42) == Start()

    async def test_set_then_get(self, storage):
        """Test that set replaces the stored state."""
        state = ConfirmingName(language=Language.UA, candidate_name="Bob", prompt_message_id=5)
        await storage.set(42, state)
        assert await storage.get(42) == state

        user = Profile(name="Bob", language=Language.UA)
        await storage.set(42, AwaitingMode(user=user, fresh=True))
        assert await storage.get(42) == AwaitingMode(user=user, fresh=True)

    async def test_reset(self, storage):
        """Test that reset puts a conversation back to Start."""
        user = Profile(name="Bob", language=Language.EN, mode=Mode.OBIMY)
        await storage.set(42, ModeSelected(user=user))
        await storage.reset(42)
        assert await storage.get(42) == Start()

    async def test_conversations_are_isolated(self, storage):
        """Test that ids do not share state."""
        user = Profile(name="Bob", language=Language.EN, mode=Mode.OBIMY)
        await storage.set(1, ModeSelected(user=user))
        assert await storage.get(2) == Start()
        assert await storage.conversations() == [1]

    async def test_negative_group_ids(self, storage):
        """Test that group chat ids (negative) work as keys."""
        await storage.set(-100123, Start())
        assert await storage.conversations() == [-100123]

    async def test_corrupt_record_raises(self, storage):
        """Test that an unreadable record surfaces as StoreError."""
        await storage._conn.execute(
            "INSERT INTO dialogue_states (conversation_id, state) VALUES (?, ?)",
            (7, '{"tag": "nope"}'),
        )
        await storage._conn.commit()
        with pytest.raises(StoreError):
            await storage.get(7)

    async def test_closed_store_raises(self):
        """Test that a closed store raises StoreError."""
        store = StateStore(":memory:")
        await store.init()
        await store.close()
        with pytest.raises(StoreError):
            await store.get(1)


class TestStateStoreDurability:
    """Tests for persistence across restarts."""

    async def test_state_survives_reopen(self, tmp_path):
        """Test that a new store on the same file sees the last commit."""
        db_path = tmp_path / "nested" / "states.db"
        user = Profile(name="Alice", language=Language.EN, mode=Mode.SPOTIFY)

        first = StateStore(db_path)
        await first.init()
        await first.set(10, ModeSelected(user=user))
        await first.set(11, AwaitingMode(user=user, fresh=False))
        await first.close()

        second = StateStore(db_path)
        await second.init()
        try:
            assert await second.get(10) == ModeSelected(user=user)
            assert await second.get(11) == AwaitingMode(user=user, fresh=False)
        finally:
            await second.close()
