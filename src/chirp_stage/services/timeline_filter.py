"""Build the shared visibility filter used by every post listing."""

from __future__ import annotations

from sqlalchemy import ColumnElement, and_, or_
from sqlalchemy.orm import Session

from chirp_stage.models import Account, Post, PostStatus
from chirp_stage.services.visibility import VisibilityService


def _visible_authors_clause(following: set[int]) -> ColumnElement[bool]:
    return or_(
        Post.author_id.in_(following),
        Post.author.has(Account.is_public.is_(True)),
    )


def build_filter(
    db: Session,
    viewer_id: int,
    *,
    parent_id: int | None = None,
    status: PostStatus | None = None,
) -> ColumnElement[bool]:
    """Return the filter for posts ``viewer_id`` may list.

    Args:
        db: Database session used to read the viewer's follow edges.
        viewer_id: Authenticated account performing the listing.
        parent_id: Restrict to comments of this post; when omitted only
            top-level posts match.
        status: Status to match, ``APPROVED`` unless stated.

    Returns:
        A boolean clause usable in ``select(Post).where(...)``.
    """
    following = VisibilityService(db).following_set_plus_self(viewer_id)
    return _shaped_filter(following, parent_id=parent_id, status=status)


def _shaped_filter(
    following: set[int],
    *,
    parent_id: int | None,
    status: PostStatus | None,
) -> ColumnElement[bool]:
    parent_clause = Post.parent_id == parent_id if parent_id is not None else Post.parent_id.is_(None)
    return and_(
        _visible_authors_clause(following),
        parent_clause,
        Post.status == (status or PostStatus.APPROVED),
    )


def build_single_post_filter(
    db: Session,
    viewer_id: int,
    post_id: int,
    *,
    status: PostStatus | None = None,
) -> ColumnElement[bool]:
    """Return the filter matching one post by id, whether top-level or a comment.

    Parentage is not restricted: a viewer may open a comment directly.
    """
    following = VisibilityService(db).following_set_plus_self(viewer_id)
    return and_(_any_shape_filter(following, status=status), Post.id == post_id)


def build_post_ids_filter(
    db: Session,
    viewer_id: int,
    post_ids: list[int],
    *,
    status: PostStatus | None = None,
) -> ColumnElement[bool]:
    """Return the filter matching the visible subset of ``post_ids``.

    Same shape as :func:`build_single_post_filter`, with the viewer's
    following set read once for the whole batch.
    """
    following = VisibilityService(db).following_set_plus_self(viewer_id)
    return and_(_any_shape_filter(following, status=status), Post.id.in_(post_ids))


def _any_shape_filter(following: set[int], *, status: PostStatus | None) -> ColumnElement[bool]:
    target_status = status or PostStatus.APPROVED
    top_level = _shaped_filter(following, parent_id=None, status=target_status)
    has_parent = and_(
        _visible_authors_clause(following),
        Post.parent_id.is_not(None),
        Post.status == target_status,
    )
    return or_(top_level, has_parent)
