"""Follow-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class FollowResponse(BaseModel):
    """An active follow edge."""

    follower_id: int
    followed_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FriendsResponse(BaseModel):
    """Ids of accounts in a mutual follow with the caller."""

    friend_ids: list[int]
