"""API routers for the backend service."""

from fastapi import APIRouter

from .routes import health_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["health"])

__all__ = ["api_router"]
