"""Data access helpers for follow edges."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from chirp_stage.db.time import utcnow
from chirp_stage.models.follow import Follow

__all__ = ["FollowRepository"]


class FollowRepository:
    """Queries over the follow table; only edges with ``deleted_at IS NULL`` are active."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def find_edge(self, follower_id: int, followed_id: int) -> Follow | None:
        """Return the edge row for an ordered pair, active or removed."""
        result = self.session.execute(
            select(Follow).where(
                Follow.follower_id == follower_id,
                Follow.followed_id == followed_id,
            )
        )
        return result.scalars().first()

    def active_edge_exists(self, follower_id: int, followed_id: int) -> bool:
        """Return True if ``follower_id`` currently follows ``followed_id``."""
        result = self.session.execute(
            select(Follow.id).where(
                Follow.follower_id == follower_id,
                Follow.followed_id == followed_id,
                Follow.deleted_at.is_(None),
            )
        )
        return result.first() is not None

    def followed_ids(self, follower_id: int) -> set[int]:
        """Return ids of every account ``follower_id`` actively follows."""
        result = self.session.execute(
            select(Follow.followed_id).where(
                Follow.follower_id == follower_id,
                Follow.deleted_at.is_(None),
            )
        )
        return set(result.scalars())

    def follower_ids(self, followed_id: int) -> set[int]:
        """Return ids of every account actively following ``followed_id``."""
        result = self.session.execute(
            select(Follow.follower_id).where(
                Follow.followed_id == followed_id,
                Follow.deleted_at.is_(None),
            )
        )
        return set(result.scalars())

    def create(self, follower_id: int, followed_id: int) -> Follow:
        """Insert a fresh active edge."""
        edge = Follow(follower_id=follower_id, followed_id=followed_id)
        self.session.add(edge)
        self.session.flush()
        return edge

    def reactivate(self, edge: Follow) -> Follow:
        """Clear the removal marker on an existing edge."""
        edge.deleted_at = None
        self.session.flush()
        return edge

    def remove(self, edge: Follow) -> Follow:
        """Stamp the removal marker, keeping the row for history."""
        edge.deleted_at = utcnow()
        self.session.flush()
        return edge
