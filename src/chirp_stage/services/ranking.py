"""Engagement ordering for comment listings."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, TypeVar


class Engagement(Protocol):
    like_count: int
    retweet_count: int
    comment_count: int


def engagement_key(item: Engagement) -> tuple[int, int]:
    """Return the descending sort key: reactions first, then comment count."""
    return (item.like_count + item.retweet_count, item.comment_count)


T = TypeVar("T", bound="Engagement")


def rank_comments(comments: Iterable[T]) -> list[T]:
    """Order comments by likes + retweets, ties broken by comment count.

    ``sorted`` is stable, so true ties keep their paginated order.
    """
    return sorted(comments, key=engagement_key, reverse=True)
