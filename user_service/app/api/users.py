"""User management API endpoints."""

import logging
import math
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import Response
from pydantic import BaseModel, ValidationError

from user_service.app.api.deps import get_user_repository
from user_service.app.core.config import settings
from user_service.app.core.exceptions import (
    MalformedRequestError,
    UserNotFoundError,
    UserValidationError,
)
from user_service.app.core.representation import (
    empty_response,
    negotiate_response_format,
    read_body,
    render,
)
from user_service.app.repositories.user_repository import InMemoryUserRepository
from user_service.app.schemas.user import CreateUserRequest, PaginationHeader, UpdateUserRequest
from user_service.app.services.patch import apply_patch, parse_patch_document
from user_service.app.services.user_mapper import (
    apply_update_request,
    from_create_request,
    from_update_request,
    to_update_request,
    to_view,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

ALLOWED_COLLECTION_METHODS = "POST, GET, OPTIONS"


def _parse_user_id(raw: str) -> UUID | None:
    """Parse a route id; malformed and all-zero ids yield None."""
    try:
        user_id = UUID(raw)
    except ValueError:
        return None
    return None if user_id.int == 0 else user_id


def _validate(schema: type[BaseModel], data: Any) -> Any:
    """
    Validate decoded body data against a schema.

    Raises:
        UserValidationError: With messages keyed by camelCase field name
    """
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        errors: dict[str, list[str]] = {}
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "request"
            errors.setdefault(field, []).append(error["msg"])
        raise UserValidationError(errors) from e


def _user_location(request: Request, user_id: UUID) -> str:
    return str(request.url_for("get_user_by_id", user_id=str(user_id)))


def _page_link(request: Request, page_number: int, page_size: int) -> str:
    return str(
        request.url_for("get_users").include_query_params(
            pageNumber=page_number,
            pageSize=page_size,
        )
    )


def _created(request: Request, user_id: UUID, media_type: str) -> Response:
    return render(
        user_id,
        media_type,
        status_code=status.HTTP_201_CREATED,
        headers={"Location": _user_location(request, user_id)},
        xml_root="Guid",
    )


@router.get("/{user_id}", name="get_user_by_id")
async def get_user_by_id(
    user_id: str,
    repository: InMemoryUserRepository = Depends(get_user_repository),
    media_type: str = Depends(negotiate_response_format),
) -> Response:
    """Get a user by id."""
    parsed_id = _parse_user_id(user_id)
    entity = repository.find_by_id(parsed_id) if parsed_id is not None else None
    if entity is None:
        raise UserNotFoundError(user_id)

    return render(to_view(entity), media_type, xml_root="User")


@router.head("/{user_id}")
async def head_user_by_id(
    user_id: str,
    repository: InMemoryUserRepository = Depends(get_user_repository),
    media_type: str = Depends(negotiate_response_format),
) -> Response:
    """Check a user exists without sending its representation."""
    parsed_id = _parse_user_id(user_id)
    if parsed_id is None or repository.find_by_id(parsed_id) is None:
        raise UserNotFoundError(user_id)

    return empty_response(status.HTTP_200_OK, media_type=media_type)


@router.get("", name="get_users")
async def get_users(
    request: Request,
    page_number: int = Query(default=1, alias="pageNumber"),
    page_size: int | None = Query(default=None, alias="pageSize"),
    repository: InMemoryUserRepository = Depends(get_user_repository),
    media_type: str = Depends(negotiate_response_format),
) -> Response:
    """
    List users one page at a time.

    The page number is raised to at least 1 and the page size is clamped to
    [1, max_page_size]. Paging metadata goes into the X-Pagination header as
    JSON whatever the body format is.
    """
    if page_size is None:
        page_size = settings.default_page_size
    page_number = max(page_number, 1)
    page_size = min(max(page_size, 1), settings.max_page_size)

    entities, total_count = repository.get_page(page_number, page_size)
    total_pages = math.ceil(total_count / page_size)

    pagination = PaginationHeader(
        previous_page_link=_page_link(request, page_number - 1, page_size) if page_number > 1 else None,
        next_page_link=_page_link(request, page_number + 1, page_size) if page_number < total_pages else None,
        total_count=total_count,
        page_size=page_size,
        current_page=page_number,
        total_pages=total_pages,
    )

    return render(
        [to_view(entity) for entity in entities],
        media_type,
        headers={"X-Pagination": pagination.model_dump_json(by_alias=True)},
        xml_root="ArrayOfUser",
        xml_item="User",
    )


@router.post("")
async def create_user(
    request: Request,
    repository: InMemoryUserRepository = Depends(get_user_repository),
    media_type: str = Depends(negotiate_response_format),
) -> Response:
    """Create a user and return its id."""
    data = await read_body(request)
    if data is None:
        raise MalformedRequestError("User body is required")

    user = _validate(CreateUserRequest, data)
    entity = repository.insert(from_create_request(user))
    logger.info(f"[USERS] Created user {entity.id} with login '{entity.login}'")

    return _created(request, entity.id, media_type)


@router.put("/{user_id}")
async def upsert_user(
    user_id: str,
    request: Request,
    repository: InMemoryUserRepository = Depends(get_user_repository),
    media_type: str = Depends(negotiate_response_format),
) -> Response:
    """
    Replace the user stored under the route id, creating it if needed.

    Returns 201 with the id when the user was created, 204 when replaced.
    """
    parsed_id = _parse_user_id(user_id)
    if parsed_id is None:
        raise MalformedRequestError(f"Route user id is missing or invalid: {user_id}")

    data = await read_body(request)
    if data is None:
        raise MalformedRequestError("User body is required")

    if isinstance(data, dict):
        # The route id wins; a body id is never read
        data = {key: value for key, value in data.items() if key.lower() != "id"}

    user = _validate(UpdateUserRequest, data)
    entity, was_inserted = repository.update_or_insert(from_update_request(user, parsed_id))

    if was_inserted:
        logger.info(f"[USERS] Created user {entity.id} through replace")
        return _created(request, entity.id, media_type)

    logger.info(f"[USERS] Replaced user {entity.id}")
    return empty_response(status.HTTP_204_NO_CONTENT)


@router.patch("/{user_id}", dependencies=[Depends(negotiate_response_format)])
async def partially_update_user(
    user_id: str,
    request: Request,
    repository: InMemoryUserRepository = Depends(get_user_repository),
) -> Response:
    """Apply a JSON Patch document to the update representation of a user."""
    parsed_id = _parse_user_id(user_id)
    if parsed_id is None:
        raise UserNotFoundError(user_id)

    operations = parse_patch_document(await read_body(request))

    entity = repository.find_by_id(parsed_id)
    if entity is None:
        raise UserNotFoundError(user_id)

    document = to_update_request(entity).model_dump(mode="json", by_alias=True, exclude={"id"})
    patched = _validate(UpdateUserRequest, apply_patch(document, operations))

    if not repository.update(apply_update_request(entity, patched)):
        # Deleted between lookup and update
        raise UserNotFoundError(user_id)

    logger.info(f"[USERS] Patched user {parsed_id} with {len(operations)} operation(s)")
    return empty_response(status.HTTP_204_NO_CONTENT)


@router.delete("/{user_id}", dependencies=[Depends(negotiate_response_format)])
async def delete_user(
    user_id: str,
    repository: InMemoryUserRepository = Depends(get_user_repository),
) -> Response:
    """Delete a user."""
    parsed_id = _parse_user_id(user_id)
    if parsed_id is None or repository.find_by_id(parsed_id) is None:
        raise UserNotFoundError(user_id)

    repository.delete(parsed_id)
    logger.info(f"[USERS] Deleted user {parsed_id}")
    return empty_response(status.HTTP_204_NO_CONTENT)


@router.options("")
async def get_users_options() -> Response:
    """Advertise the methods supported on the users collection."""
    return empty_response(status.HTTP_200_OK, headers={"Allow": ALLOWED_COLLECTION_METHODS})
