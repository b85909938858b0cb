# tests/services/test_message_service.py
"""Tests for direct messages."""

import logging
from datetime import timedelta

import pytest

from chirp_stage.core.errors import ForbiddenError, NotFoundError, ValidationError
from chirp_stage.services.message_service import MESSAGE_MAX_LENGTH, MessageService
from tests.helpers import BASE_TIME


@pytest.fixture()
def friends(alice, bob, make_follow):
    make_follow(alice, bob)
    make_follow(bob, alice)
    return alice, bob


def test_conversation_is_newest_first(db_session, friends) -> None:
    alice, bob = friends
    service = MessageService(db_session)
    first = service.send(alice.id, bob.id, "hi")
    second = service.send(bob.id, alice.id, "hey")
    first.created_at = BASE_TIME
    second.created_at = BASE_TIME + timedelta(minutes=1)
    db_session.commit()

    assert [m.id for m in service.conversation(alice.id, bob.id)] == [second.id, first.id]
    assert [m.id for m in service.conversation(bob.id, alice.id, skip=1)] == [first.id]
    assert [m.id for m in service.conversation(bob.id, alice.id, take=1)] == [second.id]


def test_messages_require_friendship(db_session, alice, bob, make_follow) -> None:
    make_follow(alice, bob)
    service = MessageService(db_session)

    with pytest.raises(ForbiddenError):
        service.send(alice.id, bob.id, "hi")
    with pytest.raises(ForbiddenError):
        service.conversation(alice.id, bob.id)
    with pytest.raises(NotFoundError):
        service.send(alice.id, 9999, "hi")


def test_message_content_is_validated(db_session, friends) -> None:
    alice, bob = friends
    service = MessageService(db_session)

    with pytest.raises(ValidationError):
        service.send(alice.id, bob.id, " ")
    with pytest.raises(ValidationError):
        service.send(alice.id, bob.id, "x" * (MESSAGE_MAX_LENGTH + 1))


def test_send_is_logged(db_session, friends, caplog) -> None:
    alice, bob = friends
    caplog.set_level(logging.INFO, logger="chirp_stage.services.message_service")

    message = MessageService(db_session).send(alice.id, bob.id, "hi")

    assert f"sent message {message.id}" in caplog.text
