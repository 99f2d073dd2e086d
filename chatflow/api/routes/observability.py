"""Observability API routes."""

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ...app import IApplication
from ...errors import StoreError
from ...models import state_to_dict


class HealthResponse(BaseModel):
    """Response model for health."""

    status: str


class ConversationStateResponse(BaseModel):
    """Response model for a stored dialogue state."""

    conversation_id: int
    state: dict[str, Any]


def create_observability_router(app: IApplication) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/health", response_model=HealthResponse)
    async def health() -> dict:
        return {"status": "ok"}

    @router.get("/conversations", response_model=list[int])
    async def list_conversations() -> list[int]:
        """List conversations that have a stored state."""
        try:
            return await app.storage.conversations()
        except StoreError as e:
            raise HTTPException(status_code=503, detail=str(e))

    @router.get(
        "/conversations/{conversation_id}/state",
        response_model=ConversationStateResponse,
    )
    async def get_state(conversation_id: int) -> dict:
        """Get the current dialogue state of one conversation."""
        try:
            state = await app.storage.get(conversation_id)
        except StoreError as e:
            raise HTTPException(status_code=503, detail=str(e))
        return {"conversation_id": conversation_id, "state": state_to_dict(state)}

    return router
