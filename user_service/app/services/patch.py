"""Apply JSON Patch documents to flat user representations."""

import copy
from typing import Any

from pydantic import ValidationError

from user_service.app.core.exceptions import MalformedRequestError, PatchOperationError
from user_service.app.schemas.patch import PatchOperation


def parse_patch_document(raw: Any) -> list[PatchOperation]:
    """
    Parse a decoded request body into patch operations.

    Args:
        raw: Decoded JSON body

    Returns:
        List of operations in document order

    Raises:
        MalformedRequestError: If the body is missing or not a list
        PatchOperationError: If an entry is not a valid operation
    """
    if raw is None:
        raise MalformedRequestError("Patch document is required")
    if not isinstance(raw, list):
        raise MalformedRequestError("Patch document must be a list of operations")

    operations = []
    for index, entry in enumerate(raw):
        try:
            operations.append(PatchOperation.model_validate(entry))
        except ValidationError as e:
            field = entry.get("path", "") if isinstance(entry, dict) else ""
            first_error = e.errors()[0]
            raise PatchOperationError(
                field=_unescape(field.lstrip("/")) or f"operations[{index}]",
                message=first_error["msg"],
            ) from e
    return operations


def _unescape(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")


def _resolve_field(document: dict[str, Any], pointer: str | None) -> str:
    """Map a single-segment JSON pointer onto an existing key of the document."""
    if not pointer or not pointer.startswith("/") or pointer == "/":
        raise PatchOperationError(pointer or "path", f"The path '{pointer}' does not point to a field.")

    if "/" in pointer[1:]:
        raise PatchOperationError(
            pointer[1:].split("/")[0],
            f"The path '{pointer}' is nested; only top-level fields can be patched.",
        )

    segment = _unescape(pointer[1:])
    for key in document:
        if key.lower() == segment.lower():
            return key
    raise PatchOperationError(
        segment,
        f"The target location specified by path segment '{segment}' was not found.",
    )


def apply_patch(document: dict[str, Any], operations: list[PatchOperation]) -> dict[str, Any]:
    """
    Apply operations in order to a copy of a flat document.

    Every key of the document is a patchable field; operations cannot add new
    keys. ``remove`` resets the field to None.

    Args:
        document: Field name to value mapping
        operations: Parsed patch operations

    Returns:
        The patched copy

    Raises:
        PatchOperationError: If an operation targets an unknown field or a test fails
    """
    patched = copy.deepcopy(document)

    for operation in operations:
        target = _resolve_field(patched, operation.path)

        if operation.op in ("add", "replace"):
            patched[target] = copy.deepcopy(operation.value)
        elif operation.op == "remove":
            patched[target] = None
        elif operation.op == "copy":
            source = _resolve_field(patched, operation.from_)
            patched[target] = copy.deepcopy(patched[source])
        elif operation.op == "move":
            source = _resolve_field(patched, operation.from_)
            value = patched[source]
            patched[source] = None
            patched[target] = value
        elif operation.op == "test":
            if patched[target] != operation.value:
                raise PatchOperationError(
                    target,
                    f"The current value '{patched[target]}' at path '{target}' "
                    f"is not equal to the test value '{operation.value}'.",
                )

    return patched
