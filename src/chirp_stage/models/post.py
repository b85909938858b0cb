# src/chirp_stage/models/post.py
"""SQLAlchemy models for posts and comments."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chirp_stage.db.session import Base
from chirp_stage.db.time import utcnow


class PostStatus(str, enum.Enum):
    """Lifecycle of a post: ``PENDING`` awaits media, ``APPROVED`` is published."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"


class Post(Base):
    """Primary content entity produced by accounts.

    A post with ``parent_id`` set is a comment on that parent.
    """

    __tablename__ = "post"
    __table_args__ = (
        Index("ix_post_created_at_id", "created_at", "id"),
        Index("ix_post_parent_id", "parent_id"),
        Index("ix_post_author_id", "author_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("account.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(String(240), nullable=False)
    # Ordered image names; download URLs are resolved through storage at read time.
    images: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    status: Mapped[PostStatus] = mapped_column(
        Enum(PostStatus, name="post_status"),
        nullable=False,
        default=PostStatus.APPROVED,
    )
    parent_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=True,
    )

    author = relationship("Account", back_populates="posts", lazy="joined")
    comments = relationship("Post", cascade="all, delete-orphan")
    reactions = relationship(
        "Reaction",
        cascade="all, delete-orphan",
        back_populates="post",
    )
