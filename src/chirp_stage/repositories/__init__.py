"""Data access helpers wrapping the SQLAlchemy session."""

from .account_repo import AccountRepository
from .follow_repo import FollowRepository
from .post_repo import PostRepository
from .reaction_repo import ReactionRepository

__all__ = [
    "AccountRepository",
    "FollowRepository",
    "PostRepository",
    "ReactionRepository",
]
