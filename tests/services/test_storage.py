# tests/services/test_storage.py
"""Tests for the S3-backed storage service."""

import boto3
import pytest
from botocore.exceptions import ClientError
from botocore.stub import Stubber

from chirp_stage.core.errors import StorageError
from chirp_stage.services.storage import StorageService, post_prefix, profile_prefix

BUCKET = "chirp-test"


@pytest.fixture()
def s3_client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture()
def storage_service(s3_client) -> StorageService:
    return StorageService(client=s3_client, bucket=BUCKET, expires_seconds=60)


def test_prefixes() -> None:
    assert post_prefix(3, 7) == "3/post/7/"
    assert profile_prefix(3) == "3/public/profile-image/"


def test_upload_targets_preserve_order(storage_service) -> None:
    urls = storage_service.request_upload_targets(1, 2, ["b.png", "a.png"])

    assert len(urls) == 2
    assert "1/post/2/b.png" in urls[0]
    assert "1/post/2/a.png" in urls[1]
    assert all(BUCKET in url for url in urls)


def test_download_targets_list_uploaded_objects(storage_service, s3_client) -> None:
    with Stubber(s3_client) as stubber:
        stubber.add_response(
            "list_objects_v2",
            {"Contents": [{"Key": "1/post/2/"}, {"Key": "1/post/2/a.png"}]},
            {"Bucket": BUCKET, "Prefix": "1/post/2/"},
        )
        urls = storage_service.request_download_targets(1, 2)

    assert len(urls) == 1
    assert "1/post/2/a.png" in urls[0]


def test_download_targets_empty_when_nothing_uploaded(storage_service, s3_client, caplog) -> None:
    with Stubber(s3_client) as stubber:
        stubber.add_response("list_objects_v2", {}, {"Bucket": BUCKET, "Prefix": "1/post/2/"})
        assert storage_service.request_download_targets(1, 2) == []
    assert "No media found" in caplog.text


def test_profile_picture_absent_is_none(storage_service, s3_client) -> None:
    with Stubber(s3_client) as stubber:
        stubber.add_response(
            "list_objects_v2", {}, {"Bucket": BUCKET, "Prefix": "5/public/profile-image/"}
        )
        assert storage_service.request_profile_download_target(5) is None


def test_listing_failure_raises_storage_error(storage_service, s3_client) -> None:
    with Stubber(s3_client) as stubber:
        stubber.add_client_error("list_objects_v2", service_error_code="AccessDenied")
        with pytest.raises(StorageError):
            storage_service.request_download_targets(1, 2)


def test_signing_failure_raises_storage_error(storage_service, s3_client, mocker) -> None:
    mocker.patch.object(
        s3_client,
        "generate_presigned_url",
        side_effect=ClientError({"Error": {"Code": "Boom"}}, "GeneratePresignedUrl"),
    )
    with pytest.raises(StorageError):
        storage_service.request_profile_upload_target(5)
