"""JSON Patch operation schema."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PatchOperation(BaseModel):
    """Single RFC 6902 operation as found in a patch document."""

    model_config = ConfigDict(populate_by_name=True)

    op: Literal["add", "remove", "replace", "move", "copy", "test"]
    path: str = Field(..., description="JSON pointer to the target field")
    value: Any = None
    from_: str | None = Field(default=None, alias="from", description="Source pointer for move/copy")

    @model_validator(mode="before")
    @classmethod
    def require_operands(cls, data: Any) -> Any:
        """Check value/from are present for the operations that need them."""
        if isinstance(data, dict):
            op = data.get("op")
            if op in ("add", "replace", "test") and "value" not in data:
                raise ValueError(f"'{op}' operation requires a 'value'")
            if op in ("move", "copy") and "from" not in data and "from_" not in data:
                raise ValueError(f"'{op}' operation requires a 'from'")
        return data
