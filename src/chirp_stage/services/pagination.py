"""Cursor pagination over the post timeline.

Rows are totally ordered by ``created_at DESC, id ASC``. Cursors name a post
id; the page never includes the cursor row itself.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import ColumnElement, and_, or_, select
from sqlalchemy.orm import Session

from chirp_stage.core.errors import ValidationError
from chirp_stage.core.settings import settings
from chirp_stage.models import Post


@dataclass(frozen=True)
class CursorWindow:
    """Request-scoped pagination window.

    ``before`` and ``after`` are mutually exclusive; supplying both is
    rejected rather than silently preferring one.
    """

    limit: int = settings.feed_default_limit
    before: int | None = None
    after: int | None = None

    def __post_init__(self) -> None:
        if self.before is not None and self.after is not None:
            raise ValidationError("Use either 'before' or 'after', not both")
        if not 1 <= self.limit <= settings.feed_max_limit:
            raise ValidationError(
                f"'limit' must be between 1 and {settings.feed_max_limit}"
            )

    @property
    def cursor(self) -> int | None:
        """Return whichever cursor id was supplied."""
        return self.after if self.after is not None else self.before


def paginate(db: Session, criteria: ColumnElement[bool], window: CursorWindow) -> list[Post]:
    """Return one page of posts matching ``criteria``.

    Args:
        db: Database session.
        criteria: Filter produced by the timeline filter builder.
        window: Limit and optional cursor.

    Returns:
        Posts in ``created_at DESC, id ASC`` order. An unknown cursor id
        yields an empty page.
    """
    stmt = select(Post).where(criteria)

    if window.cursor is None:
        stmt = stmt.order_by(Post.created_at.desc(), Post.id.asc()).limit(window.limit)
        return list(db.execute(stmt).scalars())

    anchor = db.execute(
        select(Post.created_at, Post.id).where(Post.id == window.cursor)
    ).first()
    if anchor is None:
        return []
    anchor_created_at, anchor_id = anchor

    if window.after is not None:
        # Rows that sort strictly after the anchor.
        stmt = stmt.where(
            or_(
                Post.created_at < anchor_created_at,
                and_(Post.created_at == anchor_created_at, Post.id > anchor_id),
            )
        ).order_by(Post.created_at.desc(), Post.id.asc())
        return list(db.execute(stmt.limit(window.limit)).scalars())

    # Take backwards from the anchor, then restore the canonical order.
    stmt = stmt.where(
        or_(
            Post.created_at > anchor_created_at,
            and_(Post.created_at == anchor_created_at, Post.id < anchor_id),
        )
    ).order_by(Post.created_at.asc(), Post.id.desc())
    rows = list(db.execute(stmt.limit(window.limit)).scalars())
    rows.reverse()
    return rows
