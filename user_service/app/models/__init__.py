"""Domain models."""

from user_service.app.models.user import Gender, UserEntity

__all__ = ["Gender", "UserEntity"]
