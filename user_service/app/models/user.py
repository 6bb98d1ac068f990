"""User model."""

from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class Gender(str, Enum):
    """Gender of a user, serialized by name."""

    MALE = "Male"
    FEMALE = "Female"

    @classmethod
    def _missing_(cls, value: object) -> "Gender | None":
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


class UserEntity(BaseModel):
    """
    User record as stored by the repository.

    Attributes:
        id: Unique user identifier, assigned on insert
        login: Login name (letters and digits)
        first_name: User's first name
        last_name: User's last name
        gender: Optional gender
        current_games_number: Current game score
    """

    id: UUID | None = None
    login: str
    first_name: str
    last_name: str
    gender: Gender | None = None
    current_games_number: int = Field(default=0)

    def __repr__(self) -> str:
        return f"<UserEntity(id={self.id}, login={self.login})>"
