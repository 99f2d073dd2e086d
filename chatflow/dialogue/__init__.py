"""Dialogue module."""

from .handlers import StepHandlers
from .locks import ConversationLocks
from .router import DialogueRouter, IDialogueRouter, build_dispatch_table

__all__ = [
    "StepHandlers",
    "ConversationLocks",
    "DialogueRouter",
    "IDialogueRouter",
    "build_dispatch_table",
]
