"""Pydantic schemas for API request/response validation."""

from user_service.app.schemas.user import (
    CreateUserRequest,
    PaginationHeader,
    UpdateUserRequest,
    UserView,
)
from user_service.app.schemas.patch import PatchOperation

__all__ = [
    "CreateUserRequest",
    "PaginationHeader",
    "UpdateUserRequest",
    "UserView",
    "PatchOperation",
]
