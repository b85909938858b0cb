"""Object-storage collaborator issuing presigned upload and download URLs.

Media lives in an S3-compatible bucket under per-account prefixes::

    {account_id}/post/{post_id}/{filename}
    {account_id}/public/profile-image/image

The service never proxies bytes; clients PUT and GET directly against the
presigned URLs it returns.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from chirp_stage.core.errors import StorageError
from chirp_stage.core.settings import settings

logger = logging.getLogger(__name__)

PROFILE_IMAGE_NAME = "image"


class StorageBackend(Protocol):
    """Contract the post and user services rely on."""

    def request_upload_targets(
        self, owner_id: int, post_id: int, filenames: list[str]
    ) -> list[str]: ...

    def request_download_targets(self, owner_id: int, post_id: int) -> list[str]: ...

    def request_profile_upload_target(self, owner_id: int) -> str: ...

    def request_profile_download_target(self, owner_id: int) -> str | None: ...


def post_prefix(owner_id: int, post_id: int) -> str:
    """Return the key prefix holding a post's media."""
    return f"{owner_id}/post/{post_id}/"


def profile_prefix(owner_id: int) -> str:
    """Return the key prefix holding an account's profile image."""
    return f"{owner_id}/public/profile-image/"


class StorageService:
    """S3-backed implementation of :class:`StorageBackend`."""

    def __init__(
        self,
        client: Any | None = None,
        bucket: str | None = None,
        expires_seconds: int | None = None,
    ) -> None:
        self.client = client or boto3.client(
            "s3",
            region_name=settings.storage_region,
            endpoint_url=settings.storage_endpoint_url,
            aws_access_key_id=settings.storage_access_key_id,
            aws_secret_access_key=settings.storage_secret_access_key,
            config=Config(signature_version="s3v4"),
        )
        self.bucket = bucket or settings.storage_bucket
        self.expires_seconds = expires_seconds or settings.storage_url_expires_seconds

    def _presign(self, method: str, key: str) -> str:
        try:
            return self.client.generate_presigned_url(
                ClientMethod=method,
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=self.expires_seconds,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Could not sign storage URL for {key}") from exc

    def _list_keys(self, prefix: str) -> list[str]:
        try:
            response = self.client.list_objects_v2(Bucket=self.bucket, Prefix=prefix)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Could not list storage objects under {prefix}") from exc
        # Skip any zero-byte "folder" placeholder sharing the prefix.
        return [
            item["Key"]
            for item in response.get("Contents", [])
            if item.get("Key") and item["Key"] != prefix
        ]

    def request_upload_targets(
        self, owner_id: int, post_id: int, filenames: list[str]
    ) -> list[str]:
        """Return one presigned PUT URL per filename, preserving order."""
        prefix = post_prefix(owner_id, post_id)
        return [self._presign("put_object", f"{prefix}{name}") for name in filenames]

    def request_download_targets(self, owner_id: int, post_id: int) -> list[str]:
        """Return presigned GET URLs for every object uploaded for a post."""
        keys = self._list_keys(post_prefix(owner_id, post_id))
        if not keys:
            logger.warning("No media found for post %s of account %s", post_id, owner_id)
        return [self._presign("get_object", key) for key in keys]

    def request_profile_upload_target(self, owner_id: int) -> str:
        """Return a presigned PUT URL replacing the account's profile image."""
        return self._presign("put_object", f"{profile_prefix(owner_id)}{PROFILE_IMAGE_NAME}")

    def request_profile_download_target(self, owner_id: int) -> str | None:
        """Return a presigned GET URL for the profile image, or None when absent."""
        keys = self._list_keys(profile_prefix(owner_id))
        if not keys:
            return None
        return self._presign("get_object", keys[0])


@lru_cache(maxsize=1)
def get_storage_service() -> StorageService:
    """Return the shared storage service."""
    return StorageService()
