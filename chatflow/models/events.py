"""Inbound update data models."""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union


class EventKind(str, Enum):
    """Input channels a dialogue step can react to."""

    TEXT = "text"
    CALLBACK = "callback"


@dataclass(frozen=True)
class TextMessage:
    """A message typed by the user. ``text`` is None for stickers, photos etc."""

    conversation_id: int
    sender_id: int | None
    text: str | None

    kind: ClassVar[EventKind] = EventKind.TEXT


@dataclass(frozen=True)
class CallbackQuery:
    """A button press on a message previously sent by the bot."""

    conversation_id: int
    sender_id: int | None
    origin_message_id: int
    payload: str | None

    kind: ClassVar[EventKind] = EventKind.CALLBACK


InboundEvent = Union[TextMessage, CallbackQuery]
