"""Data access layer."""

from user_service.app.repositories.user_repository import InMemoryUserRepository

__all__ = ["InMemoryUserRepository"]
