"""Service-level helpers for creating, finalizing and listing posts.

Creating a post that declares images is a two-phase operation: the row is
committed as ``PENDING`` first, then one presigned upload URL is requested
per image. Once the client has uploaded the media it calls ``finalize`` and
the post becomes ``APPROVED`` and visible in feeds. A crash between the two
phases leaves a pending post without upload URLs; the author can request
them again with :meth:`PostService.reissue_upload_targets`.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

from sqlalchemy.orm import Session

from chirp_stage.core.errors import ForbiddenError, NotFoundError, ValidationError
from chirp_stage.core.settings import settings
from chirp_stage.models import Post, PostStatus
from chirp_stage.repositories.post_repo import PostRepository
from chirp_stage.services import post_status
from chirp_stage.services.engagement import EngagementService, ExtendedPost
from chirp_stage.services.pagination import CursorWindow, paginate
from chirp_stage.services.ranking import rank_comments
from chirp_stage.services.storage import StorageBackend
from chirp_stage.services.timeline_filter import build_filter, build_single_post_filter
from chirp_stage.services.visibility import VisibilityService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreatedPost:
    """Creation result for a post published immediately."""

    post: Post
    kind: Literal["post"] = "post"


@dataclass(frozen=True)
class PendingPost:
    """Creation result for a post waiting on media uploads."""

    id: int
    upload_targets: list[str] = field(default_factory=list)
    kind: Literal["pending"] = "pending"


CreationResult = CreatedPost | PendingPost


def dedupe_image_names(images: Sequence[str]) -> list[str]:
    """Rename repeated image names so each maps to a distinct storage key.

    The n-th repeat of a name gets a ``" (n)"`` suffix; generated names are
    registered too, so they are disambiguated again if they collide.

    >>> dedupe_image_names(["a.png", "a.png", "b.png"])
    ['a.png', 'a.png (1)', 'b.png']
    """
    seen: dict[str, int] = {}
    renamed: list[str] = []
    for name in images:
        if name not in seen:
            seen[name] = 0
            renamed.append(name)
            continue
        seen[name] += 1
        candidate = f"{name} ({seen[name]})"
        while candidate in seen:
            seen[name] += 1
            candidate = f"{name} ({seen[name]})"
        seen[candidate] = 0
        renamed.append(candidate)
    return renamed


def validate_post_input(content: str, images: Sequence[str] | None) -> None:
    """Reject malformed content before touching the store."""
    if not content or not content.strip():
        raise ValidationError("Post content must not be empty")
    if len(content) > settings.post_max_length:
        raise ValidationError(
            f"Post content must be at most {settings.post_max_length} characters"
        )
    if images and len(images) > settings.post_max_images:
        raise ValidationError(f"A post can carry at most {settings.post_max_images} images")
    if images and any(not name or "/" in name for name in images):
        raise ValidationError("Image names must be non-empty and must not contain '/'")


class PostService:
    """Coordinate post creation, finalization, deletion and timeline reads."""

    def __init__(self, db: Session, storage: StorageBackend) -> None:
        self.db = db
        self.storage = storage
        self.posts = PostRepository(db)
        self.visibility = VisibilityService(db)
        self.engagement = EngagementService(db, storage)

    # --- creation -----------------------------------------------------------
    def create_post(
        self,
        author_id: int,
        content: str,
        images: Sequence[str] | None = None,
    ) -> CreationResult:
        """Create a top-level post.

        Returns:
            ``CreatedPost`` when there are no images, otherwise a
            ``PendingPost`` carrying one upload URL per image.
        """
        validate_post_input(content, images)
        return self._insert(author_id, content, images)

    def create_comment(
        self,
        author_id: int,
        parent_id: int,
        content: str,
        images: Sequence[str] | None = None,
    ) -> CreationResult:
        """Create a comment on ``parent_id`` after checking the parent.

        Raises:
            NotFoundError: The parent does not exist.
            ForbiddenError: The parent's author is private and not followed.
            ConflictError: The parent is still pending.
        """
        validate_post_input(content, images)
        parent = self.posts.get_by_id(parent_id)
        if parent is None:
            raise NotFoundError("Parent post not found")
        if not self.visibility.can_view(author_id, parent.author_id):
            raise ForbiddenError(
                "You can't comment on this post; the author is private and you don't follow them"
            )
        post_status.ensure_commentable(parent)
        return self._insert(author_id, content, images, parent_id=parent.id)

    def _insert(
        self,
        author_id: int,
        content: str,
        images: Sequence[str] | None,
        parent_id: int | None = None,
    ) -> CreationResult:
        status = post_status.initial_status(images)
        names = dedupe_image_names(images) if images else None
        post = self.posts.create(
            author_id=author_id,
            content=content,
            images=names,
            status=status,
            parent_id=parent_id,
        )
        # The row must be durable before any upload URL is handed out.
        self.db.commit()
        self.db.refresh(post)

        if names is None:
            logger.info("Post %s published by account %s", post.id, author_id)
            return CreatedPost(post=post)

        targets = self.storage.request_upload_targets(author_id, post.id, names)
        logger.info(
            "Post %s created pending with %d upload targets by account %s",
            post.id,
            len(targets),
            author_id,
        )
        return PendingPost(id=post.id, upload_targets=targets)

    # --- lifecycle ----------------------------------------------------------
    def _get_own_pending(self, author_id: int, post_id: int) -> Post:
        criteria = build_single_post_filter(
            self.db, author_id, post_id, status=PostStatus.PENDING
        )
        post = self.posts.find_one(criteria)
        if post is None:
            raise NotFoundError("Pending post not found")
        if post.author_id != author_id:
            raise ForbiddenError("Only the author can finalize this post")
        return post

    def finalize_post(self, author_id: int, post_id: int) -> Post:
        """Publish a pending post once its author confirms the uploads."""
        post = self._get_own_pending(author_id, post_id)
        post_status.approve(post)
        self.db.commit()
        self.db.refresh(post)
        logger.info("Post %s finalized by account %s", post.id, author_id)
        return post

    def reissue_upload_targets(self, author_id: int, post_id: int) -> PendingPost:
        """Hand out fresh upload URLs for a post that is still pending."""
        post = self._get_own_pending(author_id, post_id)
        targets = self.storage.request_upload_targets(author_id, post.id, list(post.images or []))
        return PendingPost(id=post.id, upload_targets=targets)

    def delete_post(self, author_id: int, post_id: int) -> None:
        """Delete a post, its comments and its reactions.

        The caller must see the post (approved and visible, or their own
        pending post) and must be its author.
        """
        post = self.posts.find_one(build_single_post_filter(self.db, author_id, post_id))
        if post is None:
            candidate = self.posts.get_by_id(post_id)
            if candidate is not None and candidate.author_id == author_id:
                post = candidate
        if post is None:
            raise NotFoundError("Post not found")
        if post.author_id != author_id:
            raise ForbiddenError("You can only delete your own posts")
        self.posts.delete(post)
        self.db.commit()
        logger.info("Post %s deleted by account %s", post_id, author_id)

    # --- reads --------------------------------------------------------------
    def get_post(self, viewer_id: int, post_id: int) -> ExtendedPost:
        """Return one approved post visible to the viewer.

        Raises:
            NotFoundError: The post is missing, pending, or its author is
                private and not followed.
        """
        post = self.posts.find_one(build_single_post_filter(self.db, viewer_id, post_id))
        if post is None:
            raise NotFoundError("Post not found")
        return self.engagement.extend(post)

    def list_feed(self, viewer_id: int, window: CursorWindow) -> list[ExtendedPost]:
        """Return one page of top-level posts in timeline order."""
        criteria = build_filter(self.db, viewer_id)
        return self.engagement.extend_all(paginate(self.db, criteria, window))

    def list_comments(
        self, viewer_id: int, parent_id: int, window: CursorWindow
    ) -> list[ExtendedPost]:
        """Return one page of comments, re-ordered by engagement."""
        criteria = build_filter(self.db, viewer_id, parent_id=parent_id)
        page = self.engagement.extend_all(paginate(self.db, criteria, window))
        return rank_comments(page)

    def list_by_author(
        self, viewer_id: int, author_id: int, *, comments: bool = False
    ) -> list[ExtendedPost]:
        """Return an author's approved posts (or comments) if the viewer may see them."""
        if not self.visibility.can_view(viewer_id, author_id):
            raise NotFoundError(
                "You can't see this user's posts; the user is private or doesn't exist"
            )
        return self.engagement.extend_all(self.posts.list_by_author(author_id, comments=comments))
