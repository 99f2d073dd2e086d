"""Update injection API routes."""

from typing import Any, Literal

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ...app import IApplication
from ...errors import NotStartedError, StoreError, TransportError
from ...models import CallbackQuery, TextMessage, state_to_dict


class UpdateRequest(BaseModel):
    """Request model for an inbound update."""

    kind: Literal["text", "callback"]
    conversation_id: int
    sender_id: int | None = None
    text: str | None = None
    origin_message_id: int | None = None
    payload: str | None = None


class UpdateResponse(BaseModel):
    """Response model for a processed update."""

    conversation_id: int
    handled_as: Literal["command", "dialogue"]
    state: dict[str, Any] | None


def create_updates_router(app: IApplication) -> APIRouter:
    """Create updates router."""
    router = APIRouter(prefix="/api", tags=["updates"])

    @router.post("/updates", response_model=UpdateResponse)
    async def post_update(request: UpdateRequest) -> dict:
        """Feed one text message or button press into the dialogue."""
        if request.kind == "callback":
            if request.origin_message_id is None:
                raise HTTPException(
                    status_code=422, detail="origin_message_id is required for callbacks"
                )
            event = CallbackQuery(
                conversation_id=request.conversation_id,
                sender_id=request.sender_id,
                origin_message_id=request.origin_message_id,
                payload=request.payload,
            )
        else:
            event = TextMessage(
                conversation_id=request.conversation_id,
                sender_id=request.sender_id,
                text=request.text,
            )

        try:
            state = await app.processor.handle(event)
        except TransportError as e:
            raise HTTPException(status_code=502, detail=str(e))
        except StoreError as e:
            raise HTTPException(status_code=503, detail=str(e))
        except NotStartedError as e:
            raise HTTPException(status_code=503, detail=str(e))

        return {
            "conversation_id": request.conversation_id,
            "handled_as": "command" if state is None else "dialogue",
            "state": state_to_dict(state) if state is not None else None,
        }

    return router
