"""Data access helpers for working with accounts."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from chirp_stage.models.account import Account

__all__ = ["AccountRepository"]


class AccountRepository:
    """Thin wrapper around database access for account entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, account_id: int) -> Account | None:
        """Return an account by identifier."""
        return self.session.get(Account, account_id)

    def exists(self, account_id: int) -> bool:
        """Return True if an account with ``account_id`` exists."""
        result = self.session.execute(select(Account.id).where(Account.id == account_id))
        return result.scalar_one_or_none() is not None

    def set_visibility(self, account: Account, is_public: bool) -> Account:
        """Flip the public/private flag and flush the change."""
        account.is_public = is_public
        self.session.flush()
        return account

    def list_paginated(self, *, skip: int = 0, take: int | None = None) -> list[Account]:
        """Return accounts ordered by id, offset-paginated."""
        stmt = select(Account).order_by(Account.id.asc()).offset(max(skip, 0))
        if take is not None:
            stmt = stmt.limit(take)
        return list(self.session.execute(stmt).scalars())

    def search_by_username(
        self, fragment: str, *, skip: int = 0, take: int | None = None
    ) -> list[Account]:
        """Return accounts whose username contains ``fragment``, ignoring case."""
        stmt = (
            select(Account)
            .where(func.lower(Account.username).contains(fragment.lower(), autoescape=True))
            .order_by(Account.id.asc())
            .offset(max(skip, 0))
        )
        if take is not None:
            stmt = stmt.limit(take)
        return list(self.session.execute(stmt).scalars())

    def delete(self, account: Account) -> None:
        """Delete an account; the ORM cascades remove its posts, reactions, follows and messages."""
        self.session.delete(account)
        self.session.flush()
