# src/chirp_stage/api/v1/endpoints/messages.py
"""Direct message endpoints for the Chirp API."""

from fastapi import APIRouter, Query, status

from chirp_stage.schemas.message import MessageCreate, MessageResponse
from chirp_stage.services.message_service import MessageService

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("/{user_id}", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    user_id: int,
    message_data: MessageCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Send a direct message to a mutual follower."""
    message = MessageService(db).send(current_user.id, user_id, message_data.content)
    return MessageResponse.model_validate(message)


@router.get("/{user_id}", response_model=list[MessageResponse])
async def get_conversation(
    user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    skip: int = Query(0, ge=0, description="Number of messages to skip"),
    take: int = Query(50, ge=1, le=100, description="Maximum number of messages to return"),
) -> list[MessageResponse]:
    """Return your conversation with a mutual follower, newest first."""
    messages = MessageService(db).conversation(current_user.id, user_id, skip=skip, take=take)
    return [MessageResponse.model_validate(message) for message in messages]
