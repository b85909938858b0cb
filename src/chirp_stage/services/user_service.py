"""Account views, visibility toggling and profile pictures."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from chirp_stage.core.errors import NotFoundError
from chirp_stage.models import Account
from chirp_stage.repositories.account_repo import AccountRepository
from chirp_stage.services.storage import StorageBackend
from chirp_stage.services.visibility import VisibilityService

logger = logging.getLogger(__name__)


@dataclass
class AccountView:
    """Public projection of an account as seen by a viewer."""

    account: Account
    profile_picture: str | None
    follows_you: bool


class UserService:
    """Service for account-level reads and settings."""

    def __init__(self, db: Session, storage: StorageBackend) -> None:
        self.db = db
        self.storage = storage
        self.accounts = AccountRepository(db)
        self.visibility = VisibilityService(db)

    def get_view(self, viewer_id: int, account_id: int) -> AccountView:
        """Return the account with its profile picture URL (None when unset)."""
        account = self.accounts.get_by_id(account_id)
        if account is None:
            raise NotFoundError("User not found")
        return self._view(viewer_id, account)

    def _view(self, viewer_id: int, account: Account) -> AccountView:
        return AccountView(
            account=account,
            profile_picture=self.storage.request_profile_download_target(account.id),
            follows_you=self.visibility.active_follow_edge(account.id, viewer_id),
        )

    def list_users(
        self, viewer_id: int, *, skip: int = 0, take: int | None = None
    ) -> list[AccountView]:
        """Return a page of accounts ordered by id, as recommendations."""
        accounts = self.accounts.list_paginated(skip=skip, take=take)
        return [self._view(viewer_id, account) for account in accounts]

    def search_by_username(
        self, viewer_id: int, fragment: str, *, skip: int = 0, take: int | None = None
    ) -> list[AccountView]:
        """Return accounts whose username contains ``fragment`` (case-insensitive)."""
        accounts = self.accounts.search_by_username(fragment, skip=skip, take=take)
        return [self._view(viewer_id, account) for account in accounts]

    def set_visibility(self, account_id: int, is_public: bool) -> Account:
        """Make the account public or private."""
        account = self.accounts.get_by_id(account_id)
        if account is None:
            raise NotFoundError("User not found")
        self.accounts.set_visibility(account, is_public)
        self.db.commit()
        logger.info("Account %s is now %s", account_id, "public" if is_public else "private")
        return account

    def profile_picture_upload_target(self, account_id: int) -> str:
        """Return a presigned URL the client uses to upload a new profile picture."""
        if not self.accounts.exists(account_id):
            raise NotFoundError("User not found")
        return self.storage.request_profile_upload_target(account_id)

    def delete_account(self, account_id: int) -> None:
        """Delete an account along with its posts, reactions, follows and messages."""
        account = self.accounts.get_by_id(account_id)
        if account is None:
            raise NotFoundError("User not found")
        self.accounts.delete(account)
        self.db.commit()
        logger.info("Account %s deleted", account_id)
