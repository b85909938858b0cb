# src/chirp_stage/services/__init__.py
"""Business logic services for the Chirp application."""

from .follow_service import FollowService
from .message_service import MessageService
from .post_service import PostService
from .reaction_service import ReactionService
from .storage import StorageService
from .user_service import UserService
from .visibility import VisibilityService

__all__ = [
    "FollowService",
    "MessageService",
    "PostService",
    "ReactionService",
    "StorageService",
    "UserService",
    "VisibilityService",
]
