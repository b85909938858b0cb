"""Reaction-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from chirp_stage.models import ReactionType


class ReactionResponse(BaseModel):
    """A stored reaction."""

    reactioner_id: int
    post_id: int
    type: ReactionType
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
