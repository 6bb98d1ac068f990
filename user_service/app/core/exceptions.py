"""Custom exception classes for the Users API."""

from uuid import UUID


class UsersApiException(Exception):
    """Base exception for all Users API errors."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class MalformedRequestError(UsersApiException):
    """Raised when a required request body or route value is missing or unreadable."""

    def __init__(self, message: str, details: str | None = None):
        super().__init__(
            message=message,
            details=details or "The request could not be read"
        )


class UserNotFoundError(UsersApiException):
    """Raised when a user is not found."""

    def __init__(self, user_id: UUID | str | None):
        super().__init__(
            message=f"User not found: {user_id}",
            details="The requested user does not exist"
        )
        self.user_id = user_id


class UserValidationError(UsersApiException):
    """Raised when one or more fields of a user representation are invalid.

    Attributes:
        errors: Field name (camelCase) mapped to the list of messages for it
    """

    def __init__(self, errors: dict[str, list[str]]):
        fields = ", ".join(sorted(errors)) or "request"
        super().__init__(
            message=f"Validation failed for: {fields}",
            details="One or more fields have invalid values"
        )
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, message: str) -> "UserValidationError":
        """Build an error carrying a single field message."""
        return cls({field: [message]})


class UnsupportedRepresentationError(UsersApiException):
    """Raised when none of the media types in the Accept header can be produced."""

    def __init__(self, accept: str):
        super().__init__(
            message=f"Cannot produce a response for Accept: {accept}",
            details="Supported representations are application/json and application/xml"
        )
        self.accept = accept


class UnsupportedMediaTypeError(UsersApiException):
    """Raised when a request body arrives in a format that cannot be read."""

    def __init__(self, content_type: str):
        super().__init__(
            message=f"Unsupported request content type: {content_type}",
            details="Request bodies must be JSON or XML"
        )
        self.content_type = content_type


class PatchOperationError(UsersApiException):
    """Raised when a patch operation cannot be applied to a representation."""

    def __init__(self, field: str, message: str):
        super().__init__(message=message, details=f"Patch operation failed on '{field}'")
        self.field = field
