"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from chirp_stage.core.security import decode_account_id
from chirp_stage.core.settings import settings
from chirp_stage.db.session import get_db
from chirp_stage.models import Account
from chirp_stage.services.pagination import CursorWindow
from chirp_stage.services.storage import StorageBackend, get_storage_service

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_storage_dep() -> StorageBackend:
    """Return the shared object-storage collaborator."""
    return get_storage_service()


StorageDep = Annotated[StorageBackend, Depends(get_storage_dep)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> Account:
    """Get the current authenticated account from the JWT token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        Account for the authenticated caller

    Raises:
        HTTPException: If token is invalid or account not found
    """
    try:
        account_id = decode_account_id(credentials.credentials)
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err
    if account_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )

    account = db.get(Account, account_id)
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return account


# Type alias for current user dependency
CurrentUserDep = Annotated[Account, Depends(get_current_user)]


def get_cursor_window(
    limit: int = Query(
        settings.feed_default_limit,
        ge=1,
        le=settings.feed_max_limit,
        description="Maximum number of posts to return",
    ),
    before: int | None = Query(None, description="Return posts that precede this post id"),
    after: int | None = Query(None, description="Return posts that follow this post id"),
) -> CursorWindow:
    """Collect cursor pagination query parameters into a window."""
    return CursorWindow(limit=limit, before=before, after=after)


CursorWindowDep = Annotated[CursorWindow, Depends(get_cursor_window)]
