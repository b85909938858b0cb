"""Shared test helpers."""
from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from chirp_stage.core.security import create_access_token
from chirp_stage.models import Account
from chirp_stage.services.storage import post_prefix, profile_prefix

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


class FakeStorage:
    """In-memory stand-in for the S3 collaborator."""

    def __init__(self) -> None:
        self.objects: set[str] = set()
        self.upload_requests: list[tuple[int, int, list[str]]] = []

    def upload(self, key: str) -> None:
        self.objects.add(key)

    def request_upload_targets(self, owner_id: int, post_id: int, filenames: list[str]) -> list[str]:
        self.upload_requests.append((owner_id, post_id, list(filenames)))
        prefix = post_prefix(owner_id, post_id)
        return [f"https://storage.test/put/{prefix}{name}" for name in filenames]

    def request_download_targets(self, owner_id: int, post_id: int) -> list[str]:
        prefix = post_prefix(owner_id, post_id)
        return sorted(f"https://storage.test/get/{key}" for key in self.objects if key.startswith(prefix))

    def request_profile_upload_target(self, owner_id: int) -> str:
        return f"https://storage.test/put/{profile_prefix(owner_id)}image"

    def request_profile_download_target(self, owner_id: int) -> str | None:
        key = f"{profile_prefix(owner_id)}image"
        return f"https://storage.test/get/{key}" if key in self.objects else None


def auth_headers(account: Account) -> dict[str, str]:
    """Return authorization headers for ``account``."""
    return {"Authorization": f"Bearer {create_access_token(account.id)}"}


def ids(items: list[Any]) -> list[int]:
    """Return ids from posts or extended post views."""
    return [getattr(item, "post", item).id for item in items]
