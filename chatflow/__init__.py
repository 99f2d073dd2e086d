"""Chatflow: a persisted onboarding dialogue for chat bots."""

from .app import Application, IApplication
from .commands import CommandHandler, ICommandHandler
from .config import Settings
from .dialogue import ConversationLocks, DialogueRouter, IDialogueRouter, StepHandlers
from .errors import (
    ChatflowError,
    CommandError,
    NotStartedError,
    StoreError,
    TransportError,
    UnrecognizedCallbackPayload,
)
from .gateway import IRenderGateway, LoggingGateway
from .models import (
    AwaitingLanguage,
    AwaitingMode,
    AwaitingName,
    CallbackQuery,
    ConfirmingName,
    DialogueState,
    Language,
    Mode,
    ModeSelected,
    Profile,
    Start,
    TextMessage,
)
from .processor import IUpdateProcessor, UpdateProcessor
from .storage import IStateStore, StateStore

__all__ = [
    # Application
    "Application",
    "IApplication",
    "Settings",
    # Models
    "DialogueState",
    "Start",
    "AwaitingLanguage",
    "AwaitingName",
    "ConfirmingName",
    "AwaitingMode",
    "ModeSelected",
    "Profile",
    "Language",
    "Mode",
    "TextMessage",
    "CallbackQuery",
    # Errors
    "ChatflowError",
    "TransportError",
    "StoreError",
    "UnrecognizedCallbackPayload",
    "CommandError",
    "NotStartedError",
    # Components
    "IStateStore",
    "StateStore",
    "IRenderGateway",
    "LoggingGateway",
    "ConversationLocks",
    "StepHandlers",
    "IDialogueRouter",
    "DialogueRouter",
    "ICommandHandler",
    "CommandHandler",
    "IUpdateProcessor",
    "UpdateProcessor",
]
