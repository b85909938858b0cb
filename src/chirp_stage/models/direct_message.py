# src/chirp_stage/models/direct_message.py
"""Models describing direct messages between accounts."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from chirp_stage.db.session import Base
from chirp_stage.db.time import utcnow


class DirectMessage(Base):
    """Plain-text message exchanged between two mutual followers."""

    __tablename__ = "direct_message"
    __table_args__ = (
        Index("ix_direct_message_pair", "sender_id", "receiver_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sender_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("account.id", ondelete="CASCADE"),
        nullable=False,
    )
    receiver_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("account.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
