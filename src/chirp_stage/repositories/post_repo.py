"""Data access helpers for working with posts."""
from __future__ import annotations

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.orm import Session

from chirp_stage.models.post import Post, PostStatus

__all__ = ["PostRepository"]


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier regardless of status or visibility."""
        return self.session.get(Post, post_id)

    def find_one(self, criteria: ColumnElement[bool]) -> Post | None:
        """Return the first post matching a prebuilt filter expression."""
        result = self.session.execute(select(Post).where(criteria).limit(1))
        return result.scalars().first()

    def list_by_author(self, author_id: int, *, comments: bool) -> list[Post]:
        """Return approved posts (or comments) by an author, newest first."""
        parent_clause = Post.parent_id.is_not(None) if comments else Post.parent_id.is_(None)
        result = self.session.execute(
            select(Post)
            .where(
                Post.author_id == author_id,
                Post.status == PostStatus.APPROVED,
                parent_clause,
            )
            .order_by(Post.created_at.desc(), Post.id.asc())
        )
        return list(result.scalars())

    def create(
        self,
        *,
        author_id: int,
        content: str,
        images: list[str] | None,
        status: PostStatus,
        parent_id: int | None = None,
    ) -> Post:
        """Insert a new post and return the persisted ORM instance.

        Args:
            author_id: Identifier of the authoring account.
            content: Text body, already validated for length.
            images: Deduplicated image names, or None for a text-only post.
            status: Initial lifecycle status chosen by the coordinator.
            parent_id: Parent post identifier when creating a comment.
        """
        post = Post(
            author_id=author_id,
            content=content,
            images=images or None,
            status=status,
            parent_id=parent_id,
        )
        self.session.add(post)
        self.session.flush()
        return post

    def delete(self, post: Post) -> None:
        """Delete a post along with its comments and reactions."""
        self.session.delete(post)
        self.session.flush()

    def count_comments(self, post_id: int) -> int:
        """Count approved comments replying to ``post_id``."""
        result = self.session.execute(
            select(func.count())
            .select_from(Post)
            .where(Post.parent_id == post_id, Post.status == PostStatus.APPROVED)
        )
        return int(result.scalar() or 0)

    def find_all(self, criteria: ColumnElement[bool]) -> list[Post]:
        """Return every post matching a prebuilt filter expression, unordered."""
        return list(self.session.execute(select(Post).where(criteria)).scalars())
