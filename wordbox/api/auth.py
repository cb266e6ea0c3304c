"""User API endpoints: registration, login, logout."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from wordbox.schemas.auth import CredentialsRequest, MessageResponse, TokenResponse, UserResponse
from wordbox.services.auth import SessionManager, User
from wordbox.services.errors import (
    AuthError,
    ErrorKind,
    InvalidCredentialsError,
    TokenError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["user"])

_STATUS_BY_KIND = {
    ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.BLACKLISTED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.IO_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.HASH_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_TOKEN_DETAIL = {
    ErrorKind.INVALID_TOKEN: "Invalid token",
    ErrorKind.EXPIRED: "Token has expired",
    ErrorKind.BLACKLISTED: "Token has been revoked",
}


def to_http_exception(error: AuthError) -> HTTPException:
    """Map a session manager error to an HTTP response."""
    if isinstance(error, TokenError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=_TOKEN_DETAIL[error.kind],
            headers={"WWW-Authenticate": "Bearer"},
        )

    status_code = _STATUS_BY_KIND[error.kind]
    if status_code >= 500:
        logger.error("Session manager failure (%s): %s", error.kind, error, exc_info=error)
        if error.kind is ErrorKind.IO_ERROR:
            return HTTPException(status_code=status_code, detail="Credential store unavailable")
        return HTTPException(status_code=status_code, detail="Internal error")
    return HTTPException(status_code=status_code, detail=str(error))


def get_session_manager(request: Request) -> SessionManager:
    """Dependency to get the session manager built at startup."""
    return request.app.state.session_manager


def get_bearer_token(request: Request) -> str:
    """Dependency to extract the raw token from the Authorization header."""
    auth_header = request.headers.get("Authorization", "")

    if not auth_header.startswith("Bearer ") or not auth_header[7:].strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return auth_header[7:].strip()


async def get_current_user(
    token: str = Depends(get_bearer_token),
    manager: SessionManager = Depends(get_session_manager),
) -> User:
    """Dependency to get the current authenticated user from JWT token."""
    try:
        return await manager.validate_token(token)
    except AuthError as e:
        logger.debug("Rejected token: %s", e)
        raise to_http_exception(e) from e


@router.post("/add", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def add_user(
    request: CredentialsRequest,
    manager: SessionManager = Depends(get_session_manager),
) -> MessageResponse:
    """Register a new user."""
    try:
        await manager.register(request.name, request.password)
    except AuthError as e:
        raise to_http_exception(e) from e
    return MessageResponse(message="User created successfully", name=request.name)


@router.post("/login", response_model=TokenResponse)
async def login(
    request: CredentialsRequest,
    manager: SessionManager = Depends(get_session_manager),
) -> TokenResponse:
    """Authenticate and get a JWT token.

    Unknown names and wrong passwords get the same response.
    """
    try:
        token = await manager.issue_token(request.name, request.password)
    except (UserNotFoundError, InvalidCredentialsError) as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid name or password",
        ) from e
    except AuthError as e:
        raise to_http_exception(e) from e

    return TokenResponse(
        access_token=token,
        expires_in=int(manager.token_lifetime.total_seconds()),
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(
    token: str = Depends(get_bearer_token),
    manager: SessionManager = Depends(get_session_manager),
) -> MessageResponse:
    """Revoke the presented token for the rest of its lifetime."""
    try:
        user = await manager.logout(token)
    except AuthError as e:
        raise to_http_exception(e) from e
    return MessageResponse(message="Logged out successfully", name=user.name)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)) -> UserResponse:
    """Get the current user's information."""
    return UserResponse(name=current_user.name)


@router.delete("/me", response_model=MessageResponse)
async def delete_current_user(
    token: str = Depends(get_bearer_token),
    manager: SessionManager = Depends(get_session_manager),
) -> MessageResponse:
    """Delete the caller's account and revoke the token used for the request."""
    try:
        user = await manager.logout(token)
        await manager.remove(user.name)
    except AuthError as e:
        raise to_http_exception(e) from e
    return MessageResponse(message="User removed", name=user.name)
