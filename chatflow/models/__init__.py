"""Core data models for chatflow."""

from .events import CallbackQuery, EventKind, InboundEvent, TextMessage
from .profile import Language, Mode, NameAction, Profile
from .render import Button, Keyboard
from .state import (
    AwaitingLanguage,
    AwaitingMode,
    AwaitingName,
    ConfirmingName,
    DialogueState,
    ModeSelected,
    Start,
    dump_state,
    load_state,
    state_from_dict,
    state_tag,
    state_to_dict,
)

__all__ = [
    # Events
    "EventKind",
    "TextMessage",
    "CallbackQuery",
    "InboundEvent",
    # Profile
    "Language",
    "Mode",
    "NameAction",
    "Profile",
    # Rendering
    "Button",
    "Keyboard",
    # State
    "DialogueState",
    "Start",
    "AwaitingLanguage",
    "AwaitingName",
    "ConfirmingName",
    "AwaitingMode",
    "ModeSelected",
    "state_tag",
    "state_to_dict",
    "state_from_dict",
    "dump_state",
    "load_state",
]
