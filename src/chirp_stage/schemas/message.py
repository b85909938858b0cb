"""Direct message Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from chirp_stage.services.message_service import MESSAGE_MAX_LENGTH


class MessageCreate(BaseModel):
    """Schema for sending a direct message."""

    content: str = Field(..., min_length=1, max_length=MESSAGE_MAX_LENGTH)


class MessageResponse(BaseModel):
    """Schema for a stored direct message."""

    id: int
    sender_id: int
    receiver_id: int
    content: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
