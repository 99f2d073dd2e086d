"""API routes."""

from .observability import create_observability_router
from .updates import create_updates_router

__all__ = ["create_observability_router", "create_updates_router"]
