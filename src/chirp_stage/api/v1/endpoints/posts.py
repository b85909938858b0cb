# src/chirp_stage/api/v1/endpoints/posts.py
"""Post and comment endpoints for the Chirp API."""

from fastapi import APIRouter, status

from chirp_stage.schemas.post import (
    ExtendedPostResponse,
    PendingPostResponse,
    PostCreate,
    PostCreationResponse,
    PostResponse,
)
from chirp_stage.services.post_service import CreationResult, PendingPost, PostService

from ..dependencies import CurrentUserDep, CursorWindowDep, SessionDep, StorageDep

router = APIRouter(prefix="/posts", tags=["posts"])


def _creation_response(result: CreationResult) -> PostResponse | PendingPostResponse:
    if isinstance(result, PendingPost):
        return PendingPostResponse.model_validate(result)
    return PostResponse.model_validate(result.post)


@router.get("/", response_model=list[ExtendedPostResponse])
async def list_feed(
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: StorageDep,
    window: CursorWindowDep,
) -> list[ExtendedPostResponse]:
    """List top-level posts from public authors, followed authors and yourself.

    Posts are ordered newest first; use ``after`` with the last id of a page
    to fetch the next one, or ``before`` with the first id to go back.
    """
    views = PostService(db, storage).list_feed(current_user.id, window)
    return [ExtendedPostResponse.from_view(view) for view in views]


@router.get("/by-user/{user_id}", response_model=list[ExtendedPostResponse])
async def list_posts_by_user(
    user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: StorageDep,
) -> list[ExtendedPostResponse]:
    """List a user's published posts, if you may see that user."""
    views = PostService(db, storage).list_by_author(current_user.id, user_id)
    return [ExtendedPostResponse.from_view(view) for view in views]


@router.get("/comments/by-user/{user_id}", response_model=list[ExtendedPostResponse])
async def list_comments_by_user(
    user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: StorageDep,
) -> list[ExtendedPostResponse]:
    """List a user's published comments, if you may see that user."""
    views = PostService(db, storage).list_by_author(current_user.id, user_id, comments=True)
    return [ExtendedPostResponse.from_view(view) for view in views]


@router.get("/{post_id}", response_model=ExtendedPostResponse)
async def get_post(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: StorageDep,
) -> ExtendedPostResponse:
    """Get a published post or comment by id.

    Returns 404 both when the post does not exist and when its author is
    private and not followed by the caller.
    """
    view = PostService(db, storage).get_post(current_user.id, post_id)
    return ExtendedPostResponse.from_view(view)


@router.post("/", response_model=PostCreationResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: StorageDep,
) -> PostResponse | PendingPostResponse:
    """Create a post.

    Without images the post is published immediately. With images the post
    is stored as pending and the response carries one presigned upload URL
    per image; call ``/posts/{id}/finalize`` after uploading.
    """
    result = PostService(db, storage).create_post(
        current_user.id, post_data.content, post_data.images
    )
    return _creation_response(result)


@router.post(
    "/{post_id}/finalize",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
)
async def finalize_post(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: StorageDep,
) -> PostResponse:
    """Publish a pending post or comment once its media has been uploaded."""
    post = PostService(db, storage).finalize_post(current_user.id, post_id)
    return PostResponse.model_validate(post)


@router.post("/{post_id}/upload-targets", response_model=PendingPostResponse)
async def reissue_upload_targets(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: StorageDep,
) -> PendingPostResponse:
    """Request fresh upload URLs for a post that is still pending."""
    pending = PostService(db, storage).reissue_upload_targets(current_user.id, post_id)
    return PendingPostResponse.model_validate(pending)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: StorageDep,
) -> None:
    """Delete a post together with its comments and reactions (author only)."""
    PostService(db, storage).delete_post(current_user.id, post_id)


@router.post(
    "/{post_id}/comments",
    response_model=PostCreationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: int,
    post_data: PostCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: StorageDep,
) -> PostResponse | PendingPostResponse:
    """Comment on a published post you are allowed to see."""
    result = PostService(db, storage).create_comment(
        current_user.id, post_id, post_data.content, post_data.images
    )
    return _creation_response(result)


@router.get("/{post_id}/comments", response_model=list[ExtendedPostResponse])
async def list_comments(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: StorageDep,
    window: CursorWindowDep,
) -> list[ExtendedPostResponse]:
    """List a page of comments ranked by likes + retweets, then comment count."""
    views = PostService(db, storage).list_comments(current_user.id, post_id, window)
    return [ExtendedPostResponse.from_view(view) for view in views]
