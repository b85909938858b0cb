"""Post lifecycle rules.

A post that declares images starts ``PENDING`` until its author confirms the
uploads; a text-only post starts ``APPROVED``. ``APPROVED`` is terminal.
Pending posts never appear in listings and cannot receive comments.
"""

from __future__ import annotations

from collections.abc import Sequence

from chirp_stage.core.errors import ConflictError, NotFoundError
from chirp_stage.models.post import Post, PostStatus

# Allowed transitions; APPROVED has no outgoing edges.
TRANSITIONS: dict[PostStatus, frozenset[PostStatus]] = {
    PostStatus.PENDING: frozenset({PostStatus.APPROVED}),
    PostStatus.APPROVED: frozenset(),
}


def initial_status(images: Sequence[str] | None) -> PostStatus:
    """Return the status a new post starts in."""
    return PostStatus.PENDING if images else PostStatus.APPROVED


def can_transition(current: PostStatus, target: PostStatus) -> bool:
    """Return True when ``current -> target`` is a legal transition."""
    return target in TRANSITIONS[current]


def approve(post: Post) -> None:
    """Move a pending post to ``APPROVED`` in memory.

    Raises:
        NotFoundError: If the post is not pending; finalize only ever matches
            pending posts, so an approved one is reported as missing.
    """
    if not can_transition(post.status, PostStatus.APPROVED):
        raise NotFoundError("Pending post not found")
    post.status = PostStatus.APPROVED


def ensure_commentable(parent: Post) -> None:
    """Reject comments on a parent that has not been published yet."""
    if parent.status != PostStatus.APPROVED:
        raise ConflictError(
            "You can't comment on this post yet; it has not been published"
        )


def counts_engagement(post: Post) -> bool:
    """Return True if engagement tallies are meaningful for ``post``."""
    return post.status == PostStatus.APPROVED
