# src/chirp_stage/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .follows import router as follows_router
from .messages import router as messages_router
from .posts import router as posts_router
from .reactions import router as reactions_router
from .users import router as users_router

__all__ = [
    "follows_router",
    "messages_router",
    "posts_router",
    "reactions_router",
    "users_router",
]
