from fastapi import APIRouter

from src.portfolio.api.routes import projects


def build_api_router(prefix: str) -> APIRouter:
    """Build the API router mounted under ``prefix`` (e.g. ``/api``)."""
    api_router = APIRouter(prefix=prefix)
    api_router.include_router(projects.router)
    return api_router
