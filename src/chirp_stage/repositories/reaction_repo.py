"""Data access helpers for reactions."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from chirp_stage.models.reaction import Reaction, ReactionType

__all__ = ["ReactionRepository"]


class ReactionRepository:
    """Thin wrapper around database access for reaction rows."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def find(self, reactioner_id: int, post_id: int, reaction_type: ReactionType) -> Reaction | None:
        """Return the reaction for a (reactioner, post, type) triple, if any."""
        result = self.session.execute(
            select(Reaction).where(
                Reaction.reactioner_id == reactioner_id,
                Reaction.post_id == post_id,
                Reaction.type == reaction_type,
            )
        )
        return result.scalars().first()

    def create(self, reactioner_id: int, post_id: int, reaction_type: ReactionType) -> Reaction:
        """Insert a reaction; the unique triple constraint guards concurrent duplicates."""
        reaction = Reaction(reactioner_id=reactioner_id, post_id=post_id, type=reaction_type)
        self.session.add(reaction)
        self.session.flush()
        return reaction

    def delete(self, reaction: Reaction) -> None:
        """Remove a reaction row."""
        self.session.delete(reaction)
        self.session.flush()

    def count_for_post(self, post_id: int, reaction_type: ReactionType) -> int:
        """Count reactions of one type on a post."""
        result = self.session.execute(
            select(func.count())
            .select_from(Reaction)
            .where(Reaction.post_id == post_id, Reaction.type == reaction_type)
        )
        return int(result.scalar() or 0)

    def post_ids_for_reactioner(self, reactioner_id: int, reaction_type: ReactionType) -> list[int]:
        """Return ids of posts the account reacted to with ``reaction_type``, newest first."""
        result = self.session.execute(
            select(Reaction.post_id)
            .where(Reaction.reactioner_id == reactioner_id, Reaction.type == reaction_type)
            .order_by(Reaction.created_at.desc(), Reaction.id.desc())
        )
        return list(result.scalars())
