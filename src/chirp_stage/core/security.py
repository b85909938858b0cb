"""Bearer token helpers shared by the auth dependency and tooling."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import jwt

from chirp_stage.core.settings import settings


def create_access_token(account_id: int, expires_minutes: int | None = None) -> str:
    """Mint a signed JWT whose subject is the account identifier.

    Args:
        account_id: Identifier of the account the token authenticates.
        expires_minutes: Optional lifetime override; defaults to settings.

    Returns:
        Encoded JWT string suitable for an ``Authorization: Bearer`` header.
    """
    lifetime = expires_minutes or settings.access_token_expire_minutes
    expire = datetime.now(UTC) + timedelta(minutes=lifetime)
    payload = {"sub": str(account_id), "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_account_id(token: str) -> int | None:
    """Return the account id carried by ``token``.

    Raises:
        jose.JWTError: If the token signature or expiry is invalid.
    """
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    subject = payload.get("sub")
    if subject is None:
        return None
    try:
        return int(subject)
    except (TypeError, ValueError):
        return None
