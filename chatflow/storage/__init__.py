"""Storage module."""

from .storage import IStateStore, StateStore

__all__ = ["IStateStore", "StateStore"]
