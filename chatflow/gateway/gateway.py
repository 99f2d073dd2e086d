"""Render gateway interface and the local logging gateway."""

import itertools
from typing import Protocol

from ..logging_config import get_logger
from ..models import Keyboard

logger = get_logger(__name__)


class IRenderGateway(Protocol):
    """Sends, edits and deletes bot messages on the chat platform."""

    async def send_text(
        self, conversation_id: int, text: str, keyboard: Keyboard | None = None
    ) -> int:
        """Send a new message. Return its message id."""
        ...

    async def edit_text(
        self,
        conversation_id: int,
        message_id: int,
        text: str,
        keyboard: Keyboard | None = None,
    ) -> int:
        """Replace text and buttons of an existing message. Return its message id."""
        ...

    async def delete_message(self, conversation_id: int, message_id: int) -> None:
        """Delete a message."""
        ...


class LoggingGateway:
    """Writes every render to the log instead of a chat platform.

    Used when no bot token is configured, so updates posted to the HTTP API
    still walk the whole dialogue.
    """

    def __init__(self, first_message_id: int = 1):
        self._ids = itertools.count(first_message_id)

    async def send_text(
        self, conversation_id: int, text: str, keyboard: Keyboard | None = None
    ) -> int:
        message_id = next(self._ids)
        logger.info(
            f"send #{message_id} to {conversation_id}: {text}",
            extra={
                "context": {
                    "conversation_id": conversation_id,
                    "buttons": _payloads(keyboard),
                }
            },
        )
        return message_id

    async def edit_text(
        self,
        conversation_id: int,
        message_id: int,
        text: str,
        keyboard: Keyboard | None = None,
    ) -> int:
        logger.info(
            f"edit #{message_id} in {conversation_id}: {text}",
            extra={
                "context": {
                    "conversation_id": conversation_id,
                    "buttons": _payloads(keyboard),
                }
            },
        )
        return message_id

    async def delete_message(self, conversation_id: int, message_id: int) -> None:
        logger.info(f"delete #{message_id} in {conversation_id}")


def _payloads(keyboard: Keyboard | None) -> list[list[str]]:
    if not keyboard:
        return []
    return [[button.payload for button in row] for row in keyboard]
