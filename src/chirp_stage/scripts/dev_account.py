# src/chirp_stage/scripts/dev_account.py
"""
Create the schema and a local account, then print a bearer token for it.

Token issuance belongs to the external auth service in production; this
script only exists to exercise the API against a development database.

Usage:
    python -m chirp_stage.scripts.dev_account alice --private
"""

from __future__ import annotations

import argparse

from sqlalchemy import select

from chirp_stage.core.security import create_access_token
from chirp_stage.db.session import SessionLocal, create_tables
from chirp_stage.models import Account


def ensure_account(username: str, *, is_public: bool) -> Account:
    """Return the account named ``username``, creating it when missing."""
    with SessionLocal() as db:
        account = db.execute(
            select(Account).where(Account.username == username)
        ).scalars().first()
        if account is None:
            account = Account(username=username, name=username, is_public=is_public)
            db.add(account)
            db.commit()
            db.refresh(account)
        return account


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("username")
    parser.add_argument("--private", action="store_true", help="Create the account as private")
    args = parser.parse_args()

    create_tables()
    account = ensure_account(args.username, is_public=not args.private)
    print(f"account_id={account.id}")
    print(f"token={create_access_token(account.id)}")


if __name__ == "__main__":
    main()
