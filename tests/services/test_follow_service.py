# tests/services/test_follow_service.py
"""Tests for follow edges and friendship."""

import pytest
from sqlalchemy import func, select

from chirp_stage.core.errors import ConflictError, NotFoundError, ValidationError
from chirp_stage.models import Follow
from chirp_stage.services.follow_service import FollowService
from chirp_stage.services.visibility import VisibilityService


@pytest.fixture()
def service(db_session) -> FollowService:
    return FollowService(db_session)


def _edge_count(db_session) -> int:
    return db_session.execute(select(func.count()).select_from(Follow)).scalar_one()


def test_follow_creates_active_edge(service, db_session, alice, carol) -> None:
    edge = service.follow(alice.id, carol.id)

    assert edge.is_active
    assert VisibilityService(db_session).followed_ids(alice.id) == {carol.id}


def test_refollow_reactivates_the_same_row(service, db_session, alice, bob) -> None:
    first = service.follow(alice.id, bob.id)
    service.unfollow(alice.id, bob.id)
    assert VisibilityService(db_session).followed_ids(alice.id) == set()

    again = service.follow(alice.id, bob.id)
    assert again.id == first.id
    assert again.is_active
    assert _edge_count(db_session) == 1


def test_follow_twice_conflicts(service, alice, bob) -> None:
    service.follow(alice.id, bob.id)
    with pytest.raises(ConflictError):
        service.follow(alice.id, bob.id)


def test_follow_self_and_missing(service, alice) -> None:
    with pytest.raises(ValidationError):
        service.follow(alice.id, alice.id)
    with pytest.raises(NotFoundError):
        service.follow(alice.id, 9999)


def test_unfollow_without_edge_is_noop(service, db_session, alice, bob) -> None:
    service.unfollow(alice.id, bob.id)
    assert _edge_count(db_session) == 0


def test_friends_require_mutual_follow(service, alice, bob, carol) -> None:
    service.follow(alice.id, bob.id)
    service.follow(alice.id, carol.id)
    service.follow(bob.id, alice.id)

    assert service.friends(alice.id) == [bob.id]
    assert service.friends(bob.id) == [alice.id]
    assert service.friends(carol.id) == []
    assert service.are_friends(alice.id, bob.id)
    assert service.are_friends(bob.id, alice.id)
    assert not service.are_friends(alice.id, carol.id)

    service.unfollow(bob.id, alice.id)
    assert service.friends(alice.id) == []
