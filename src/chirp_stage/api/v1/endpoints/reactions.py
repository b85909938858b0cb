# src/chirp_stage/api/v1/endpoints/reactions.py
"""Reaction endpoints for the Chirp API."""

from fastapi import APIRouter, Query, status

from chirp_stage.models import ReactionType
from chirp_stage.schemas.post import ExtendedPostResponse
from chirp_stage.schemas.reaction import ReactionResponse
from chirp_stage.services.engagement import EngagementService
from chirp_stage.services.reaction_service import ReactionService

from ..dependencies import CurrentUserDep, SessionDep, StorageDep

router = APIRouter(prefix="/reactions", tags=["reactions"])


@router.get("/by-user/{user_id}", response_model=list[ExtendedPostResponse])
async def list_reacted_posts(
    user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: StorageDep,
    reaction_type: ReactionType = Query(ReactionType.LIKE, alias="type"),
) -> list[ExtendedPostResponse]:
    """List posts a user reacted to, limited to what you may see."""
    posts = ReactionService(db).reacted_posts(current_user.id, user_id, reaction_type)
    views = EngagementService(db, storage).extend_all(posts)
    return [ExtendedPostResponse.from_view(view) for view in views]


@router.post("/{post_id}", response_model=ReactionResponse, status_code=status.HTTP_201_CREATED)
async def react_to_post(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    reaction_type: ReactionType = Query(..., alias="type"),
) -> ReactionResponse:
    """Like or retweet a post; each type can be left once per post."""
    reaction = ReactionService(db).react(current_user.id, post_id, reaction_type)
    return ReactionResponse.model_validate(reaction)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reaction(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    reaction_type: ReactionType = Query(..., alias="type"),
) -> None:
    """Remove one of your reactions from a post."""
    ReactionService(db).unreact(current_user.id, post_id, reaction_type)
