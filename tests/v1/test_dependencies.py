# tests/v1/test_dependencies.py
"""Tests for authentication and query dependencies."""

from fastapi import status

from chirp_stage.core.security import create_access_token


def test_missing_token_is_rejected(client) -> None:
    response = client.get("/api/v1/users/me")
    assert response.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


def test_invalid_token_is_rejected(client) -> None:
    response = client.get("/api/v1/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_token_for_missing_account_is_rejected(client) -> None:
    headers = {"Authorization": f"Bearer {create_access_token(9999)}"}
    response = client.get("/api/v1/users/me", headers=headers)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "User not found"


def test_both_cursors_return_422(client, alice_headers) -> None:
    response = client.get("/api/v1/posts/?before=1&after=2", headers=alice_headers)
    assert response.status_code == 422
    assert response.json()["error"] == "validation"


def test_limit_out_of_range_returns_422(client, alice_headers) -> None:
    response = client.get("/api/v1/posts/?limit=0", headers=alice_headers)
    assert response.status_code == 422
