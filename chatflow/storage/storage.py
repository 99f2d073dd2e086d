"""SQLite state store implementation."""

import sqlite3
from pathlib import Path
from typing import Protocol

import aiosqlite

from ..config import resolve_db_path
from ..errors import StoreError
from ..models import DialogueState, Start, dump_state, load_state


class IStateStore(Protocol):
    """Durable conversation id -> DialogueState mapping (SQLite)."""

    async def init(self) -> None:
        """Open the database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    async def get(self, conversation_id: int) -> DialogueState:
        """Get the current state, Start if the conversation was never seen."""
        ...

    async def set(self, conversation_id: int, state: DialogueState) -> None:
        """Replace the state of one conversation."""
        ...

    async def reset(self, conversation_id: int) -> None:
        """Put a conversation back to Start."""
        ...

    async def conversations(self) -> list[int]:
        """List conversation ids that have a stored state."""
        ...


class StateStore:
    """SQLite state store implementation."""

    def __init__(self, db_path: str | Path | None = None):
        self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        """Open the database and create tables."""
        if self._db_path != ":memory:":
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)

        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()

        try:
            self._conn = await aiosqlite.connect(self._db_path)
            await self._conn.executescript(schema_sql)
            await self._conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open state store at {self._db_path}: {e}") from e

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    def _require_conn(self) -> aiosqlite.Connection:
        if not self._conn:
            raise StoreError("Storage not initialized")
        return self._conn

    async def get(self, conversation_id: int) -> DialogueState:
        """Get the current state, Start if the conversation was never seen."""
        conn = self._require_conn()

        try:
            cursor = await conn.execute(
                """
                SELECT state
                FROM dialogue_states
                WHERE conversation_id = ?
                """,
                (conversation_id,),
            )
            row = await cursor.fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Cannot read state of {conversation_id}: {e}") from e

        if not row:
            return Start()

        return load_state(row[0])

    async def set(self, conversation_id: int, state: DialogueState) -> None:
        """Replace the state of one conversation."""
        conn = self._require_conn()

        try:
            await conn.execute(
                """
                INSERT OR REPLACE INTO dialogue_states
                (conversation_id, state, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                """,
                (conversation_id, dump_state(state)),
            )
            await conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Cannot write state of {conversation_id}: {e}") from e

    async def reset(self, conversation_id: int) -> None:
        """Put a conversation back to Start."""
        await self.set(conversation_id, Start())

    async def conversations(self) -> list[int]:
        """List conversation ids that have a stored state."""
        conn = self._require_conn()

        try:
            cursor = await conn.execute(
                "SELECT conversation_id FROM dialogue_states ORDER BY conversation_id"
            )
            rows = await cursor.fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Cannot list conversations: {e}") from e

        return [row[0] for row in rows]
