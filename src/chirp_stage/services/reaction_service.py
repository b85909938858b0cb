"""Reactions (likes and retweets) on posts."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from chirp_stage.core.errors import ConflictError, ForbiddenError, NotFoundError
from chirp_stage.models import Post, PostStatus, Reaction, ReactionType
from chirp_stage.repositories.post_repo import PostRepository
from chirp_stage.repositories.reaction_repo import ReactionRepository
from chirp_stage.services.timeline_filter import build_post_ids_filter
from chirp_stage.services.visibility import VisibilityService

logger = logging.getLogger(__name__)


class ReactionService:
    """Create, remove and list reactions.

    At most one reaction of each type per (account, post); the database
    constraint is the final arbiter when two requests race.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.posts = PostRepository(db)
        self.reactions = ReactionRepository(db)
        self.visibility = VisibilityService(db)

    def _reactable_post(self, account_id: int, post_id: int) -> Post:
        post = self.posts.get_by_id(post_id)
        if post is None or post.status != PostStatus.APPROVED:
            raise NotFoundError("Post not found")
        if not self.visibility.can_view(account_id, post.author_id):
            raise ForbiddenError("You must be following the author to react to this post")
        return post

    def react(self, account_id: int, post_id: int, reaction_type: ReactionType) -> Reaction:
        """Add a reaction.

        Raises:
            NotFoundError: Post missing or still pending.
            ForbiddenError: Author is private and not followed.
            ConflictError: The same reaction already exists.
        """
        self._reactable_post(account_id, post_id)
        if self.reactions.find(account_id, post_id, reaction_type) is not None:
            raise ConflictError("Reaction already exists for this post and type")
        try:
            reaction = self.reactions.create(account_id, post_id, reaction_type)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError("Reaction already exists for this post and type") from exc
        logger.info("Account %s reacted %s to post %s", account_id, reaction_type.value, post_id)
        return reaction

    def unreact(self, account_id: int, post_id: int, reaction_type: ReactionType) -> None:
        """Remove a reaction previously left by ``account_id``."""
        reaction = self.reactions.find(account_id, post_id, reaction_type)
        if reaction is None:
            raise NotFoundError("Reaction not found")
        self.reactions.delete(reaction)
        self.db.commit()

    def count(self, post_id: int, reaction_type: ReactionType) -> int:
        """Return the number of reactions of one type on a post."""
        return self.reactions.count_for_post(post_id, reaction_type)

    def reacted_posts(
        self, viewer_id: int, account_id: int, reaction_type: ReactionType
    ) -> list[Post]:
        """Return posts ``account_id`` reacted to that ``viewer_id`` may also see.

        Both the reacting account and each reacted post's author must be
        visible to the viewer.
        """
        if not self.visibility.can_view(viewer_id, account_id):
            raise NotFoundError(
                "You can't see this user's reactions; the user is private or doesn't exist"
            )
        post_ids = self.reactions.post_ids_for_reactioner(account_id, reaction_type)
        if not post_ids:
            return []
        criteria = build_post_ids_filter(self.db, viewer_id, post_ids)
        found = {post.id: post for post in self.posts.find_all(criteria)}
        # Keep the newest-reaction-first order.
        return [found[post_id] for post_id in post_ids if post_id in found]
