"""Content negotiation and request/response body formats."""

import json
import logging
import xml.etree.ElementTree as ET
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from user_service.app.core.exceptions import (
    MalformedRequestError,
    UnsupportedMediaTypeError,
    UnsupportedRepresentationError,
)
from user_service.app.utils.xml import from_xml, to_xml

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
XML_MEDIA_TYPE = "application/xml"

_JSON_TYPES = {"application/json", "text/json"}
_XML_TYPES = {"application/xml", "text/xml"}
_WILDCARDS = {"*/*", "application/*"}
_XML_WILDCARDS = {"text/*"}


def _media_type(header_value: str) -> str:
    return header_value.split(";", 1)[0].strip().lower()


def _parse_accept(accept: str) -> list[tuple[str, float]]:
    """Split an Accept header into (media type, quality) pairs, best first."""
    entries = []
    for part in accept.split(","):
        if not part.strip():
            continue
        media_type, *params = [piece.strip() for piece in part.split(";")]
        quality = 1.0
        for param in params:
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        entries.append((media_type.lower(), quality))
    # sorted() is stable, so equal qualities keep header order
    return sorted(entries, key=lambda entry: entry[1], reverse=True)


def negotiate(accept: str | None) -> str:
    """
    Pick the response media type for an Accept header value.

    Args:
        accept: Raw Accept header, or None when absent

    Returns:
        The media type to respond with

    Raises:
        UnsupportedRepresentationError: If no acceptable type can be produced
    """
    if not accept or not accept.strip():
        return JSON_MEDIA_TYPE

    for media_type, quality in _parse_accept(accept):
        if quality <= 0:
            continue
        if media_type in _JSON_TYPES or media_type in _WILDCARDS:
            return JSON_MEDIA_TYPE
        if media_type in _XML_TYPES:
            return media_type
        if media_type in _XML_WILDCARDS:
            return "text/xml"
    raise UnsupportedRepresentationError(accept)


def negotiate_response_format(request: Request) -> str:
    """FastAPI dependency resolving the response media type of a request."""
    return negotiate(request.headers.get("accept"))


def is_xml(media_type: str) -> bool:
    return media_type in _XML_TYPES


def render(
    content: Any,
    media_type: str,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
    xml_root: str = "Response",
    xml_item: str = "item",
) -> Response:
    """
    Serialize content in the negotiated format.

    Pydantic models are written with their camelCase aliases and every field
    present, including defaults and nulls.
    """
    data = jsonable_encoder(content, by_alias=True)
    if is_xml(media_type):
        return Response(
            content=to_xml(data, root_name=xml_root, item_name=xml_item),
            status_code=status_code,
            headers=headers,
            media_type=media_type,
        )
    return JSONResponse(content=data, status_code=status_code, headers=headers)


def empty_response(status_code: int, media_type: str | None = None, headers: dict[str, str] | None = None) -> Response:
    """Response without a body, optionally still advertising a content type."""
    response = Response(status_code=status_code, headers=headers)
    if media_type is not None:
        response.headers["content-type"] = media_type
    return response


def _is_json_content_type(media_type: str) -> bool:
    return media_type in _JSON_TYPES or (
        media_type.startswith("application/") and media_type.endswith("+json")
    )


async def read_body(request: Request) -> Any:
    """
    Decode the request body according to its Content-Type.

    A missing Content-Type is read as JSON.

    Returns:
        Decoded value, or None for an empty body or an explicit null

    Raises:
        MalformedRequestError: If the body cannot be decoded
        UnsupportedMediaTypeError: If the Content-Type is neither JSON nor XML
    """
    body = await request.body()
    if not body.strip():
        return None

    content_type = request.headers.get("content-type", "")
    media_type = _media_type(content_type)

    if not media_type or _is_json_content_type(media_type):
        try:
            return json.loads(body)
        except ValueError as e:
            logger.warning(f"[REQUEST] Unreadable JSON body: {e}")
            raise MalformedRequestError("Request body is not valid JSON", str(e)) from e

    if media_type in _XML_TYPES:
        try:
            return from_xml(body)
        except ET.ParseError as e:
            logger.warning(f"[REQUEST] Unreadable XML body: {e}")
            raise MalformedRequestError("Request body is not valid XML", str(e)) from e

    raise UnsupportedMediaTypeError(content_type)
