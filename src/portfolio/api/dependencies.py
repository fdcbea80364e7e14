"""FastAPI dependency injection definitions."""

from typing import Annotated

from fastapi import Depends, Request

from src.portfolio.repositories import ProjectStore


def get_project_store(request: Request) -> ProjectStore:
    """Get the project store owned by the running application."""
    return request.app.state.project_store


ProjectStoreDep = Annotated[ProjectStore, Depends(get_project_store)]
