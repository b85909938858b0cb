"""Follow, unfollow and friendship operations."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from chirp_stage.core.errors import ConflictError, NotFoundError, ValidationError
from chirp_stage.models import Follow
from chirp_stage.repositories.account_repo import AccountRepository
from chirp_stage.repositories.follow_repo import FollowRepository
from chirp_stage.services.visibility import VisibilityService

logger = logging.getLogger(__name__)


class FollowService:
    """Maintain soft-deleted follow edges; one row per ordered pair."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.accounts = AccountRepository(db)
        self.follows = FollowRepository(db)
        self.visibility = VisibilityService(db)

    def _check_pair(self, follower_id: int, followed_id: int) -> None:
        if follower_id == followed_id:
            raise ValidationError("You cannot follow yourself")
        if not self.accounts.exists(followed_id):
            raise NotFoundError("The other user does not exist")

    def follow(self, follower_id: int, followed_id: int) -> Follow:
        """Create or reactivate the edge follower -> followed.

        Raises:
            ValidationError: Self-follow.
            NotFoundError: Target account missing.
            ConflictError: The edge is already active.
        """
        self._check_pair(follower_id, followed_id)
        edge = self.follows.find_edge(follower_id, followed_id)
        if edge is not None and edge.is_active:
            raise ConflictError("Follow relationship already exists")
        try:
            if edge is None:
                edge = self.follows.create(follower_id, followed_id)
            else:
                edge = self.follows.reactivate(edge)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError("Follow relationship already exists") from exc
        logger.info("Account %s followed account %s", follower_id, followed_id)
        return edge

    def unfollow(self, follower_id: int, followed_id: int) -> None:
        """Mark the edge as removed; a missing or already-removed edge is a no-op."""
        self._check_pair(follower_id, followed_id)
        edge = self.follows.find_edge(follower_id, followed_id)
        if edge is None or not edge.is_active:
            return
        self.follows.remove(edge)
        self.db.commit()
        logger.info("Account %s unfollowed account %s", follower_id, followed_id)

    def friends(self, account_id: int) -> list[int]:
        """Return ids of mutual followers, ascending."""
        return sorted(self.visibility.friend_ids(account_id))

    def are_friends(self, account_id: int, other_id: int) -> bool:
        """Return True when both accounts actively follow each other."""
        return self.visibility.are_friends(account_id, other_id)
