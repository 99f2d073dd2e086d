"""DialogueRouter implementation."""

from typing import Any, Awaitable, Callable, Protocol

from ..errors import UnrecognizedCallbackPayload
from ..logging_config import get_logger
from ..models import (
    AwaitingLanguage,
    AwaitingMode,
    AwaitingName,
    ConfirmingName,
    DialogueState,
    EventKind,
    InboundEvent,
    ModeSelected,
    Start,
    state_tag,
)
from ..storage import IStateStore
from .handlers import StepHandlers
from .locks import ConversationLocks

logger = get_logger(__name__)


StepHandler = Callable[[Any, Any], Awaitable[DialogueState | None]]
DispatchTable = dict[tuple[type, EventKind], StepHandler]


def build_dispatch_table(handlers: StepHandlers) -> DispatchTable:
    """Map every (state variant, input channel) pair that has a transition."""
    return {
        (Start, EventKind.TEXT): handlers.start_text,
        (AwaitingLanguage, EventKind.TEXT): handlers.language_text,
        (AwaitingLanguage, EventKind.CALLBACK): handlers.language_callback,
        (AwaitingName, EventKind.TEXT): handlers.name_text,
        (ConfirmingName, EventKind.TEXT): handlers.confirm_text,
        (ConfirmingName, EventKind.CALLBACK): handlers.confirm_callback,
        (AwaitingMode, EventKind.TEXT): handlers.mode_text,
        (AwaitingMode, EventKind.CALLBACK): handlers.mode_callback,
        (ModeSelected, EventKind.TEXT): handlers.selected_text,
    }


class IDialogueRouter(Protocol):
    """Routes inbound updates to the step handler of the current state."""

    async def dispatch(self, event: InboundEvent) -> DialogueState:
        """Run one load-handle-commit cycle. Return the state after it."""
        ...


class DialogueRouter:
    """Runs step handlers under a per-conversation lock."""

    def __init__(
        self,
        store: IStateStore,
        handlers: StepHandlers,
        locks: ConversationLocks,
    ):
        self._store = store
        self._locks = locks
        self._table = build_dispatch_table(handlers)

    async def dispatch(self, event: InboundEvent) -> DialogueState:
        """Run one load-handle-commit cycle. Return the state after it.

        Store and gateway errors propagate and leave the committed state
        untouched.
        """
        conversation_id = event.conversation_id

        async with self._locks.hold(conversation_id):
            state = await self._store.get(conversation_id)
            handler = self._table.get((type(state), event.kind))

            if handler is None:
                logger.warning(
                    f"Dropping {event.kind.value} update in {conversation_id}: "
                    f"no handler for state {state_tag(state)}"
                )
                return state

            try:
                next_state = await handler(state, event)
            except UnrecognizedCallbackPayload as e:
                logger.warning(f"Ignoring callback in {conversation_id}: {e}")
                return state

            if next_state is None or next_state == state:
                return state

            await self._store.set(conversation_id, next_state)
            logger.info(
                f"Conversation {conversation_id}: "
                f"{state_tag(state)} -> {state_tag(next_state)}",
                extra={
                    "context": {
                        "conversation_id": conversation_id,
                        "event": event.kind.value,
                        "from": state_tag(state),
                        "to": state_tag(next_state),
                    }
                },
            )
            return next_state
