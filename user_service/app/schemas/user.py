"""User-related schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from user_service.app.models.user import Gender


LOGIN_ERROR_MESSAGE = "Login should contain only letters or digits"


class CamelModel(BaseModel):
    """Base schema serialized with lowercase-initial camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


def _validate_login(value: str) -> str:
    # Letters and decimal digits only, so "½" and "Ⅷ" fail
    if not value or not all(c.isalpha() or c.isdecimal() for c in value):
        raise PydanticCustomError("login_not_alphanumeric", LOGIN_ERROR_MESSAGE)
    return value


class UserView(CamelModel):
    """Schema for user data in responses."""

    id: UUID = Field(..., description="User ID")
    login: str = Field(..., description="Login name")
    full_name: str = Field(..., description="Last name followed by first name")
    gender: Gender | None = Field(default=None, description="Gender")
    current_games_number: int = Field(default=0, description="Current game score")


class CreateUserRequest(CamelModel):
    """Schema for creating a user. Absent names fall back to their defaults."""

    login: str = Field(..., description="Login name, letters and digits only")
    first_name: str = Field(default="John", description="User's first name")
    last_name: str = Field(default="Doe", description="User's last name")
    gender: Gender | None = Field(default=None, description="Gender")

    @field_validator("login")
    @classmethod
    def validate_login(cls, v: str) -> str:
        """Validate login consists of letters and digits."""
        return _validate_login(v)


class UpdateUserRequest(CamelModel):
    """Schema for replacing a user and target of patch documents.

    The id is always taken from the route; any id in the body is overwritten.
    """

    id: UUID | None = Field(default=None, description="User ID, set from the route")
    login: str = Field(..., description="Login name, letters and digits only")
    first_name: str = Field(..., description="User's first name")
    last_name: str = Field(..., description="User's last name")
    gender: Gender | None = Field(default=None, description="Gender")

    @field_validator("login")
    @classmethod
    def validate_login(cls, v: str) -> str:
        """Validate login consists of letters and digits."""
        return _validate_login(v)


class PaginationHeader(CamelModel):
    """Paging metadata sent in the X-Pagination response header."""

    previous_page_link: str | None = Field(default=None, description="Link to the previous page")
    next_page_link: str | None = Field(default=None, description="Link to the next page")
    total_count: int = Field(..., description="Total number of users")
    page_size: int = Field(..., description="Users per page")
    current_page: int = Field(..., description="Current page number")
    total_pages: int = Field(..., description="Total number of pages")
