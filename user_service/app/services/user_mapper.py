"""Conversions between stored users and their API representations."""

from uuid import UUID

from user_service.app.models.user import UserEntity
from user_service.app.schemas.user import CreateUserRequest, UpdateUserRequest, UserView


def to_view(entity: UserEntity) -> UserView:
    """Convert a stored user to its read representation."""
    return UserView(
        id=entity.id,
        login=entity.login,
        full_name=f"{entity.last_name} {entity.first_name}",
        gender=entity.gender,
        current_games_number=entity.current_games_number,
    )


def from_create_request(request: CreateUserRequest) -> UserEntity:
    """Build a new user (without id) from a creation request."""
    return UserEntity(
        login=request.login,
        first_name=request.first_name,
        last_name=request.last_name,
        gender=request.gender,
    )


def from_update_request(request: UpdateUserRequest, user_id: UUID) -> UserEntity:
    """Build a replacement user stored under ``user_id``."""
    return UserEntity(
        id=user_id,
        login=request.login,
        first_name=request.first_name,
        last_name=request.last_name,
        gender=request.gender,
    )


def to_update_request(entity: UserEntity) -> UpdateUserRequest:
    """Derive the update representation of a stored user."""
    return UpdateUserRequest(
        id=entity.id,
        login=entity.login,
        first_name=entity.first_name,
        last_name=entity.last_name,
        gender=entity.gender,
    )


def apply_update_request(entity: UserEntity, request: UpdateUserRequest) -> UserEntity:
    """Copy the fields of an update representation onto a stored user.

    The id and the game score of the stored user are kept.
    """
    return entity.model_copy(update={
        "login": request.login,
        "first_name": request.first_name,
        "last_name": request.last_name,
        "gender": request.gender,
    })
