# src/chirp_stage/api/v1/endpoints/users.py
"""Account endpoints for the Chirp API."""

from fastapi import APIRouter, Query, status

from chirp_stage.schemas.user import AccountResponse, ProfilePictureUpload, VisibilityUpdate
from chirp_stage.services.user_service import UserService

from ..dependencies import CurrentUserDep, SessionDep, StorageDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=list[AccountResponse])
async def list_users(
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: StorageDep,
    skip: int = Query(0, ge=0, description="Number of users to skip"),
    take: int = Query(20, ge=1, le=100, description="Maximum number of users to return"),
) -> list[AccountResponse]:
    """List recommended users, ordered by id."""
    views = UserService(db, storage).list_users(current_user.id, skip=skip, take=take)
    return [AccountResponse.from_view(view) for view in views]


@router.get("/by_username/{username}", response_model=list[AccountResponse])
async def search_users_by_username(
    username: str,
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: StorageDep,
    skip: int = Query(0, ge=0, description="Number of users to skip"),
    take: int = Query(20, ge=1, le=100, description="Maximum number of users to return"),
) -> list[AccountResponse]:
    """Find users whose username contains ``username``, ignoring case."""
    views = UserService(db, storage).search_by_username(
        current_user.id, username, skip=skip, take=take
    )
    return [AccountResponse.from_view(view) for view in views]


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def delete_me(
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: StorageDep,
) -> None:
    """Delete your account together with its posts, follows, reactions and messages."""
    UserService(db, storage).delete_account(current_user.id)


@router.get("/me", response_model=AccountResponse)
async def get_me(
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: StorageDep,
) -> AccountResponse:
    """Return the authenticated account."""
    view = UserService(db, storage).get_view(current_user.id, current_user.id)
    return AccountResponse.from_view(view)


@router.patch("/me/visibility", response_model=AccountResponse)
async def update_visibility(
    payload: VisibilityUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: StorageDep,
) -> AccountResponse:
    """Switch the authenticated account between public and private."""
    service = UserService(db, storage)
    service.set_visibility(current_user.id, payload.is_public)
    return AccountResponse.from_view(service.get_view(current_user.id, current_user.id))


@router.post("/me/profile-picture", response_model=ProfilePictureUpload)
async def request_profile_picture_upload(
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: StorageDep,
) -> ProfilePictureUpload:
    """Return a presigned URL for uploading a new profile picture."""
    target = UserService(db, storage).profile_picture_upload_target(current_user.id)
    return ProfilePictureUpload(upload_target=target)


@router.get("/{user_id}", response_model=AccountResponse)
async def get_user(
    user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: StorageDep,
) -> AccountResponse:
    """Return another account, including whether it follows you."""
    view = UserService(db, storage).get_view(current_user.id, user_id)
    return AccountResponse.from_view(view)
