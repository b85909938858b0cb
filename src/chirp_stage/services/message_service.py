"""Direct messages between mutual followers."""
from __future__ import annotations

import logging

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session

from chirp_stage.core.errors import ForbiddenError, NotFoundError, ValidationError
from chirp_stage.models import DirectMessage
from chirp_stage.repositories.account_repo import AccountRepository
from chirp_stage.services.visibility import VisibilityService

logger = logging.getLogger(__name__)

MESSAGE_MAX_LENGTH = 1000


class MessageService:
    """Persist and page through conversations; only friends may exchange messages."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.accounts = AccountRepository(db)
        self.visibility = VisibilityService(db)

    def _ensure_friends(self, account_id: int, other_id: int) -> None:
        if not self.accounts.exists(other_id):
            raise NotFoundError("Recipient not found")
        if not self.visibility.are_friends(account_id, other_id):
            raise ForbiddenError("You can only message users who follow you back")

    def send(self, sender_id: int, receiver_id: int, content: str) -> DirectMessage:
        """Store a message from ``sender_id`` to ``receiver_id``."""
        if not content or not content.strip() or len(content) > MESSAGE_MAX_LENGTH:
            raise ValidationError(
                f"Message content must be 1 to {MESSAGE_MAX_LENGTH} characters"
            )
        self._ensure_friends(sender_id, receiver_id)
        message = DirectMessage(sender_id=sender_id, receiver_id=receiver_id, content=content)
        self.db.add(message)
        self.db.commit()
        self.db.refresh(message)
        logger.info("Account %s sent message %s to account %s", sender_id, message.id, receiver_id)
        return message

    def conversation(
        self, account_id: int, other_id: int, *, skip: int = 0, take: int | None = None
    ) -> list[DirectMessage]:
        """Return messages exchanged between two accounts, newest first."""
        self._ensure_friends(account_id, other_id)
        stmt = (
            select(DirectMessage)
            .where(
                or_(
                    and_(
                        DirectMessage.sender_id == account_id,
                        DirectMessage.receiver_id == other_id,
                    ),
                    and_(
                        DirectMessage.sender_id == other_id,
                        DirectMessage.receiver_id == account_id,
                    ),
                )
            )
            .order_by(DirectMessage.created_at.desc(), DirectMessage.id.desc())
            .offset(max(skip, 0))
        )
        if take is not None:
            stmt = stmt.limit(take)
        return list(self.db.execute(stmt).scalars())
