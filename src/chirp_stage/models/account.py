# src/chirp_stage/models/account.py
"""SQLAlchemy model for user accounts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chirp_stage.db.session import Base
from chirp_stage.db.time import utcnow


class Account(Base):
    """Account whose content visibility is governed by ``is_public`` and follow edges."""

    __tablename__ = "account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    # Private accounts are visible only to themselves and active followers.
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    # Deleting an account removes everything it authored or took part in.
    posts = relationship("Post", back_populates="author", cascade="all, delete-orphan")
    reactions = relationship(
        "Reaction",
        foreign_keys="Reaction.reactioner_id",
        cascade="all, delete-orphan",
    )
    following = relationship(
        "Follow",
        foreign_keys="Follow.follower_id",
        cascade="all, delete-orphan",
    )
    followers = relationship(
        "Follow",
        foreign_keys="Follow.followed_id",
        cascade="all, delete-orphan",
    )
    sent_messages = relationship(
        "DirectMessage",
        foreign_keys="DirectMessage.sender_id",
        cascade="all, delete-orphan",
    )
    received_messages = relationship(
        "DirectMessage",
        foreign_keys="DirectMessage.receiver_id",
        cascade="all, delete-orphan",
    )
