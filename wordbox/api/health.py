"""Health check endpoint. Accessible without authentication."""

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    credential_store: str


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Report service status and which credential store backend is active."""
    return HealthResponse(
        status="healthy",
        version=request.app.version,
        credential_store=request.app.state.store_backend,
    )
