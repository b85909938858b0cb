# src/chirp_stage/models/follow.py
"""Follow edges between accounts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from chirp_stage.db.session import Base
from chirp_stage.db.time import utcnow


class Follow(Base):
    """Directed follow edge from ``follower_id`` to ``followed_id``.

    Unfollowing stamps ``deleted_at`` instead of removing the row; following
    again clears it, so each ordered pair owns exactly one row over its
    whole history.
    """

    __tablename__ = "follow"
    __table_args__ = (
        UniqueConstraint("follower_id", "followed_id", name="uq_follow_pair"),
        Index("ix_follow_followed_id", "followed_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    follower_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("account.id", ondelete="CASCADE"),
        nullable=False,
    )
    followed_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("account.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    # NULL = active edge; set = removed at that instant.
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    @property
    def is_active(self) -> bool:
        """Return True while the edge has not been removed."""
        return self.deleted_at is None
