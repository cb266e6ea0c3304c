"""Pydantic schemas for the user API."""

from pydantic import BaseModel, Field


class CredentialsRequest(BaseModel):
    """Name and password, used for registration and login.

    Empty values are accepted here and rejected by the session manager.
    """

    name: str = Field(..., max_length=255)
    password: str = Field(..., max_length=1024)


class TokenResponse(BaseModel):
    """Response with a JWT access token."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Token lifetime in seconds")


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
    name: str | None = None


class UserResponse(BaseModel):
    """The authenticated user."""

    name: str
