"""FastAPI dependency implementations."""

from fastapi import Request

from user_service.app.repositories.user_repository import InMemoryUserRepository


def get_user_repository(request: Request) -> InMemoryUserRepository:
    """Get the user repository owned by the application."""
    return request.app.state.user_repository
