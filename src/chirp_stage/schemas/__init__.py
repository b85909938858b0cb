"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .follow import FollowResponse, FriendsResponse
from .message import MessageCreate, MessageResponse
from .post import (
    AuthorSummary,
    ExtendedPostResponse,
    PendingPostResponse,
    PostCreate,
    PostCreationResponse,
    PostResponse,
)
from .reaction import ReactionResponse
from .user import AccountResponse, ProfilePictureUpload, VisibilityUpdate

__all__ = [
    "AccountResponse", "ProfilePictureUpload", "VisibilityUpdate",
    "AuthorSummary",
    "ExtendedPostResponse", "PendingPostResponse", "PostCreate",
    "PostCreationResponse", "PostResponse",
    "FollowResponse", "FriendsResponse",
    "MessageCreate", "MessageResponse",
    "ReactionResponse",
]
