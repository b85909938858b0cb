"""Read-time engagement tallies and post views."""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from chirp_stage.models import Account, Post, ReactionType
from chirp_stage.repositories.post_repo import PostRepository
from chirp_stage.repositories.reaction_repo import ReactionRepository
from chirp_stage.services.post_status import counts_engagement
from chirp_stage.services.storage import StorageBackend


@dataclass
class ExtendedPost:
    """A post together with its author and live engagement counts."""

    post: Post
    author: Account
    image_urls: list[str] = field(default_factory=list)
    like_count: int = 0
    retweet_count: int = 0
    comment_count: int = 0


class EngagementService:
    """Compute counts from reaction and comment rows at read time.

    There are no denormalized counters; every call counts current rows.
    """

    def __init__(self, db: Session, storage: StorageBackend) -> None:
        self.posts = PostRepository(db)
        self.reactions = ReactionRepository(db)
        self.storage = storage

    def extend(self, post: Post) -> ExtendedPost:
        """Return the extended view of one post."""
        view = ExtendedPost(post=post, author=post.author)
        if post.images:
            view.image_urls = self.storage.request_download_targets(post.author_id, post.id)
        if counts_engagement(post):
            view.like_count = self.reactions.count_for_post(post.id, ReactionType.LIKE)
            view.retweet_count = self.reactions.count_for_post(post.id, ReactionType.RETWEET)
            view.comment_count = self.posts.count_comments(post.id)
        return view

    def extend_all(self, posts: list[Post]) -> list[ExtendedPost]:
        """Return extended views preserving input order."""
        return [self.extend(post) for post in posts]
