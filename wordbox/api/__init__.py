"""Wordbox API Router - aggregates all API routes."""

from fastapi import APIRouter

from wordbox.api import auth, translate

# Main API router - all routes will be prefixed with /api
api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router)
api_router.include_router(translate.router)

__all__ = ["api_router"]
