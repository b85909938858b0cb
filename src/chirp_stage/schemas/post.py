# src/chirp_stage/schemas/post.py
"""Post-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chirp_stage.core.settings import settings
from chirp_stage.models import PostStatus
from chirp_stage.services.engagement import ExtendedPost


class PostCreate(BaseModel):
    """Schema for creating a new post or comment."""

    content: str = Field(
        ...,
        min_length=1,
        max_length=settings.post_max_length,
        description="Text content",
    )
    images: list[str] | None = Field(
        None,
        max_length=settings.post_max_images,
        description="Names of the images the client will upload",
    )


class PostResponse(BaseModel):
    """Schema for a post published immediately."""

    kind: Literal["post"] = "post"
    id: int
    author_id: int
    content: str
    images: list[str] = Field(default_factory=list)
    created_at: datetime
    status: PostStatus
    parent_id: int | None = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("images", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return [] if value is None else value


class PendingPostResponse(BaseModel):
    """Schema for a post awaiting media uploads."""

    kind: Literal["pending"] = "pending"
    id: int
    upload_targets: list[str]

    model_config = ConfigDict(from_attributes=True)


PostCreationResponse = Annotated[
    PostResponse | PendingPostResponse,
    Field(discriminator="kind"),
]


class AuthorSummary(BaseModel):
    """Author fields embedded in post listings."""

    id: int
    username: str
    name: str | None = None
    is_public: bool

    model_config = ConfigDict(from_attributes=True)


class ExtendedPostResponse(PostResponse):
    """Post with its author and engagement counts."""

    author: AuthorSummary
    like_count: int = 0
    retweet_count: int = 0
    comment_count: int = 0

    @classmethod
    def from_view(cls, view: ExtendedPost) -> ExtendedPostResponse:
        """Build the response from a service-level extended post."""
        post = view.post
        return cls(
            id=post.id,
            author_id=post.author_id,
            content=post.content,
            images=view.image_urls,
            created_at=post.created_at,
            status=post.status,
            parent_id=post.parent_id,
            author=AuthorSummary.model_validate(view.author),
            like_count=view.like_count,
            retweet_count=view.retweet_count,
            comment_count=view.comment_count,
        )
