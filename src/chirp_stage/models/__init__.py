# src/chirp_stage/models/__init__.py
"""SQLAlchemy models for the Chirp application."""

from .account import Account
from .direct_message import DirectMessage
from .follow import Follow
from .post import Post, PostStatus
from .reaction import Reaction, ReactionType

__all__ = [
    "Account",
    "DirectMessage",
    "Follow",
    "Post", "PostStatus",
    "Reaction", "ReactionType",
]
