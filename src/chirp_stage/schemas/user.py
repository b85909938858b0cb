"""Account-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from chirp_stage.services.user_service import AccountView


class AccountResponse(BaseModel):
    """Account as seen by the requesting viewer."""

    id: int
    username: str
    name: str | None = None
    is_public: bool
    created_at: datetime
    profile_picture: str | None = Field(
        None,
        description="Presigned download URL, null when no picture was uploaded",
    )
    follows_you: bool = False

    @classmethod
    def from_view(cls, view: AccountView) -> AccountResponse:
        """Build the response from a service-level account view."""
        account = view.account
        return cls(
            id=account.id,
            username=account.username,
            name=account.name,
            is_public=account.is_public,
            created_at=account.created_at,
            profile_picture=view.profile_picture,
            follows_you=view.follows_you,
        )


class VisibilityUpdate(BaseModel):
    """Request body toggling an account between public and private."""

    is_public: bool


class ProfilePictureUpload(BaseModel):
    """Presigned URL for uploading a new profile picture."""

    upload_target: str
