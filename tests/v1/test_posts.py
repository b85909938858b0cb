# tests/v1/test_posts.py
"""Tests for post and comment endpoints."""

from fastapi import status

from chirp_stage.models import ReactionType


def test_create_text_post(client, alice, alice_headers) -> None:
    response = client.post("/api/v1/posts/", json={"content": "hello"}, headers=alice_headers)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["kind"] == "post"
    assert data["status"] == "APPROVED"
    assert data["author_id"] == alice.id
    assert data["images"] == []


def test_create_image_post_then_finalize(client, alice_headers, bob_headers) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={"content": "look", "images": ["a.png", "a.png"]},
        headers=alice_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    pending = response.json()
    assert pending["kind"] == "pending"
    assert len(pending["upload_targets"]) == 2
    assert pending["upload_targets"][1].endswith("a.png (1)")

    feed = client.get("/api/v1/posts/", headers=bob_headers).json()
    assert pending["id"] not in [item["id"] for item in feed]

    response = client.post(f"/api/v1/posts/{pending['id']}/finalize", headers=alice_headers)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["status"] == "APPROVED"

    feed = client.get("/api/v1/posts/", headers=bob_headers).json()
    assert pending["id"] in [item["id"] for item in feed]

    response = client.post(f"/api/v1/posts/{pending['id']}/finalize", headers=alice_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error"] == "not_found"


def test_reissue_upload_targets(client, alice_headers) -> None:
    pending = client.post(
        "/api/v1/posts/", json={"content": "look", "images": ["a.png"]}, headers=alice_headers
    ).json()

    response = client.post(f"/api/v1/posts/{pending['id']}/upload-targets", headers=alice_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["upload_targets"] == pending["upload_targets"]


def test_create_post_validation(client, alice_headers) -> None:
    response = client.post("/api/v1/posts/", json={"content": "x" * 241}, headers=alice_headers)
    assert response.status_code == 422

    response = client.post(
        "/api/v1/posts/",
        json={"content": "ok", "images": ["a", "b", "c", "d", "e"]},
        headers=alice_headers,
    )
    assert response.status_code == 422


def test_feed_pagination_with_after_cursor(client, alice, alice_headers, make_post) -> None:
    posts = [make_post(alice, f"p{i}", minutes=i) for i in range(5)]
    expected = [post.id for post in reversed(posts)]

    first = client.get("/api/v1/posts/?limit=3", headers=alice_headers).json()
    second = client.get(
        f"/api/v1/posts/?limit=3&after={first[-1]['id']}", headers=alice_headers
    ).json()

    assert [item["id"] for item in first + second] == expected


def test_feed_hides_private_authors(client, alice_headers, carol, make_post) -> None:
    hidden = make_post(carol, "secret")

    feed = client.get("/api/v1/posts/", headers=alice_headers).json()
    assert hidden.id not in [item["id"] for item in feed]

    response = client.get(f"/api/v1/posts/{hidden.id}", headers=alice_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_get_post_includes_engagement(
    client, alice, bob, alice_headers, make_post, make_reaction
) -> None:
    post = make_post(bob, "hello")
    make_post(alice, "reply", parent=post)
    make_reaction(alice, post, ReactionType.LIKE)
    make_reaction(alice, post, ReactionType.RETWEET)

    data = client.get(f"/api/v1/posts/{post.id}", headers=alice_headers).json()
    assert data["author"]["username"] == "bob"
    assert data["like_count"] == 1
    assert data["retweet_count"] == 1
    assert data["comment_count"] == 1


def test_comment_flow(client, bob, alice_headers, make_post) -> None:
    parent = make_post(bob, "parent")

    response = client.post(
        f"/api/v1/posts/{parent.id}/comments", json={"content": "reply"}, headers=alice_headers
    )
    assert response.status_code == status.HTTP_201_CREATED
    comment = response.json()
    assert comment["parent_id"] == parent.id

    listing = client.get(f"/api/v1/posts/{parent.id}/comments", headers=alice_headers).json()
    assert [item["id"] for item in listing] == [comment["id"]]


def test_comment_errors(client, alice, carol, alice_headers, make_post) -> None:
    private = make_post(carol, "secret")
    response = client.post(
        f"/api/v1/posts/{private.id}/comments", json={"content": "hi"}, headers=alice_headers
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN

    pending = client.post(
        "/api/v1/posts/", json={"content": "draft", "images": ["a.png"]}, headers=alice_headers
    ).json()
    response = client.post(
        f"/api/v1/posts/{pending['id']}/comments", json={"content": "hi"}, headers=alice_headers
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error"] == "conflict"

    response = client.post(
        "/api/v1/posts/9999/comments", json={"content": "hi"}, headers=alice_headers
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_post(client, alice, alice_headers, bob_headers, make_post) -> None:
    post = make_post(alice, "mine")

    response = client.delete(f"/api/v1/posts/{post.id}", headers=bob_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = client.delete(f"/api/v1/posts/{post.id}", headers=alice_headers)
    assert response.status_code == status.HTTP_204_NO_CONTENT

    response = client.get(f"/api/v1/posts/{post.id}", headers=alice_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_posts_and_comments_by_user(client, alice, bob, alice_headers, make_post) -> None:
    post = make_post(bob, "top")
    reply = make_post(bob, "reply", parent=post)

    posts = client.get(f"/api/v1/posts/by-user/{bob.id}", headers=alice_headers).json()
    comments = client.get(
        f"/api/v1/posts/comments/by-user/{bob.id}", headers=alice_headers
    ).json()

    assert [item["id"] for item in posts] == [post.id]
    assert [item["id"] for item in comments] == [reply.id]


def test_posts_by_private_user_are_hidden(client, carol, alice_headers) -> None:
    response = client.get(f"/api/v1/posts/by-user/{carol.id}", headers=alice_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
