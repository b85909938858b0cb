# src/chirp_stage/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    follows_router,
    messages_router,
    posts_router,
    reactions_router,
    users_router,
)

__all__ = [
    "follows_router",
    "messages_router",
    "posts_router",
    "reactions_router",
    "users_router",
]
