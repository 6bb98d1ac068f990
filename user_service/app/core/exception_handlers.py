"""Exception handlers for converting custom exceptions to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import Response

from user_service.app.core.exceptions import (
    MalformedRequestError,
    PatchOperationError,
    UnsupportedMediaTypeError,
    UnsupportedRepresentationError,
    UserNotFoundError,
    UsersApiException,
    UserValidationError,
)
from user_service.app.core.representation import (
    JSON_MEDIA_TYPE,
    empty_response,
    is_xml,
    negotiate,
    render,
)

logger = logging.getLogger(__name__)


def _error_media_type(request: Request) -> str:
    """Negotiate the error body format, falling back to JSON."""
    try:
        return negotiate(request.headers.get("accept"))
    except UnsupportedRepresentationError:
        return JSON_MEDIA_TYPE


async def users_api_exception_handler(request: Request, exc: UsersApiException) -> Response:
    """
    Handle all Users API exceptions and convert to appropriate HTTP responses.

    Args:
        request: The incoming request
        exc: The exception that was raised

    Returns:
        Response with appropriate status code and error details
    """
    # Not found responses carry no body
    if isinstance(exc, UserNotFoundError):
        return empty_response(status.HTTP_404_NOT_FOUND)

    # Map exception types to HTTP status codes
    if isinstance(exc, MalformedRequestError):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, UnsupportedRepresentationError):
        status_code = status.HTTP_406_NOT_ACCEPTABLE
    elif isinstance(exc, UnsupportedMediaTypeError):
        status_code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    elif isinstance(exc, UserValidationError):
        status_code = 422
    elif isinstance(exc, PatchOperationError):
        exc = UserValidationError.for_field(exc.field, exc.message)
        status_code = 422
    else:
        # Generic UsersApiException
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    logger.warning(f"[ERROR] {request.method} {request.url.path} -> {status_code}: {exc.message}")

    media_type = _error_media_type(request)
    content = {
        "detail": exc.message,
        "type": exc.__class__.__name__,
        **({"info": exc.details} if exc.details else {}),
    }
    if isinstance(exc, UserValidationError):
        if is_xml(media_type):
            # Field names are attribute values, never tag names
            content["errors"] = [
                {"@field": field, "message": message}
                for field, messages in exc.errors.items()
                for message in messages
            ]
        else:
            content["errors"] = exc.errors

    return render(
        content,
        media_type=media_type,
        status_code=status_code,
        xml_root="ValidationProblem" if isinstance(exc, UserValidationError) else "Problem",
        xml_item="error",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all custom exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(UsersApiException, users_api_exception_handler)
