# src/chirp_stage/models/reaction.py
"""Models capturing reactions on posts."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chirp_stage.db.session import Base
from chirp_stage.db.time import utcnow


class ReactionType(str, enum.Enum):
    """Kinds of reaction an account can leave on a post."""

    LIKE = "LIKE"
    RETWEET = "RETWEET"


class Reaction(Base):
    """Per-account reaction of a given type on a post."""

    __tablename__ = "reaction"
    __table_args__ = (
        # Two concurrent inserts for the same triple must not both succeed.
        UniqueConstraint("reactioner_id", "post_id", "type", name="uq_reaction_triple"),
        Index("ix_reaction_post_id_type", "post_id", "type"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reactioner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("account.id", ondelete="CASCADE"),
        nullable=False,
    )
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    type: Mapped[ReactionType] = mapped_column(
        Enum(ReactionType, name="reaction_type"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    post = relationship("Post", back_populates="reactions")
