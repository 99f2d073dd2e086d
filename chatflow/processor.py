"""UpdateProcessor implementation."""

import asyncio
from typing import TYPE_CHECKING, Protocol

from .errors import NotStartedError, StoreError, TransportError
from .logging_config import get_logger
from .models import DialogueState, InboundEvent, TextMessage

if TYPE_CHECKING:
    from .commands import ICommandHandler
    from .dialogue import IDialogueRouter

logger = get_logger(__name__)


class IUpdateProcessor(Protocol):
    """Entry point for every inbound update."""

    async def handle(self, event: InboundEvent) -> DialogueState | None:
        """Process one update. Return the dialogue state after it, None for commands."""
        ...

    async def start(self) -> None:
        """Start accepting updates."""
        ...

    async def stop(self) -> None:
        """Stop accepting updates and wait for the ones in flight."""
        ...


class UpdateProcessor:
    """Sends commands to the command table and everything else to the router."""

    def __init__(self, router: "IDialogueRouter", commands: "ICommandHandler"):
        self._router = router
        self._commands = commands
        self._inflight: set[asyncio.Task] = set()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start accepting updates."""
        logger.info("Starting UpdateProcessor")
        self._running = True

    async def stop(self) -> None:
        """Stop accepting updates and wait for the ones in flight."""
        logger.info("Stopping UpdateProcessor")
        self._running = False

        current = asyncio.current_task()
        pending = [task for task in self._inflight if task is not current]
        if pending:
            logger.info(f"Waiting for {len(pending)} in-flight updates")
            await asyncio.gather(*pending, return_exceptions=True)

    async def handle(self, event: InboundEvent) -> DialogueState | None:
        """Process one update. Return the dialogue state after it, None for commands.

        Raises:
            NotStartedError: if the processor is not running.
            TransportError: if rendering failed; nothing was committed.
            StoreError: if the state store failed.
        """
        if not self._running:
            raise NotStartedError("UpdateProcessor not started")

        task = asyncio.current_task()
        if task is not None:
            self._inflight.add(task)
        try:
            if isinstance(event, TextMessage) and await self._commands.handle(event):
                return None
            return await self._router.dispatch(event)
        except (TransportError, StoreError) as e:
            logger.error(
                f"Update in {event.conversation_id} aborted: {e}", exc_info=True
            )
            raise
        finally:
            if task is not None:
                self._inflight.discard(task)
