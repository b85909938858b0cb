# src/chirp_stage/api/v1/endpoints/follows.py
"""Follow graph endpoints for the Chirp API."""

from fastapi import APIRouter, status

from chirp_stage.schemas.follow import FollowResponse, FriendsResponse
from chirp_stage.services.follow_service import FollowService

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/follows", tags=["follows"])


@router.get("/friends", response_model=FriendsResponse)
async def list_friends(current_user: CurrentUserDep, db: SessionDep) -> FriendsResponse:
    """List accounts that you follow and that follow you back."""
    return FriendsResponse(friend_ids=FollowService(db).friends(current_user.id))


@router.get("/friends/{user_id}")
async def are_friends(
    user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, bool]:
    """Return whether you and ``user_id`` follow each other."""
    return {"friends": FollowService(db).are_friends(current_user.id, user_id)}


@router.post("/{user_id}", response_model=FollowResponse, status_code=status.HTTP_201_CREATED)
async def follow_user(
    user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> FollowResponse:
    """Follow a user, reactivating a previous follow if there was one."""
    edge = FollowService(db).follow(current_user.id, user_id)
    return FollowResponse.model_validate(edge)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unfollow_user(
    user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> None:
    """Stop following a user; the edge is kept as history."""
    FollowService(db).unfollow(current_user.id, user_id)
