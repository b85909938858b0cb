"""Visibility rules deciding who may see an author's content."""

from __future__ import annotations

from sqlalchemy.orm import Session

from chirp_stage.models import Account
from chirp_stage.repositories.account_repo import AccountRepository
from chirp_stage.repositories.follow_repo import FollowRepository


class VisibilityService:
    """Answer visibility and friendship questions from current follow state.

    Nothing is cached between calls: every answer re-reads the account and
    follow tables so a follow or unfollow is reflected on the next request.
    """

    def __init__(self, session: Session) -> None:
        self.accounts = AccountRepository(session)
        self.follows = FollowRepository(session)

    def account_by_id(self, account_id: int) -> Account | None:
        """Return the account row or None."""
        return self.accounts.get_by_id(account_id)

    def active_follow_edge(self, follower_id: int, followed_id: int) -> bool:
        """Return True if an un-removed edge follower -> followed exists."""
        return self.follows.active_edge_exists(follower_id, followed_id)

    def followed_ids(self, account_id: int) -> set[int]:
        """Return ids of accounts ``account_id`` actively follows."""
        return self.follows.followed_ids(account_id)

    def following_set_plus_self(self, viewer_id: int) -> set[int]:
        """Return the viewer's id together with every actively followed id."""
        return {viewer_id} | self.followed_ids(viewer_id)

    def can_view(self, viewer_id: int, author_id: int) -> bool:
        """Return True when ``viewer_id`` may see content authored by ``author_id``.

        Self always sees self; public accounts are visible to everyone; private
        accounts only to active followers. A missing author is not viewable.
        """
        if viewer_id == author_id:
            return True
        author = self.account_by_id(author_id)
        if author is None:
            return False
        if author.is_public:
            return True
        return self.active_follow_edge(viewer_id, author_id)

    def are_friends(self, account_id: int, other_id: int) -> bool:
        """Return True when both accounts actively follow each other.

        Symmetric by construction; an account is its own friend.
        """
        if account_id == other_id:
            return True
        return self.active_follow_edge(account_id, other_id) and self.active_follow_edge(
            other_id, account_id
        )

    def friend_ids(self, account_id: int) -> set[int]:
        """Return ids of accounts in a mutual active follow with ``account_id``."""
        return self.follows.followed_ids(account_id) & self.follows.follower_ids(account_id)
