"""Response envelope shared by every alunos-api operation."""

from typing import Any

from pydantic import BaseModel


class FieldError(BaseModel):
    """A single validation failure tied to one input field."""
    field: str
    message: str


class ApiResponse(BaseModel):
    """Uniform envelope ``{success, message, data?, total?, errors?, error?}``.

    Optional keys left as ``None`` are dropped when serialized with
    ``to_payload()``.
    """
    success: bool
    message: str
    data: Any = None
    total: int | None = None
    errors: list[FieldError] | None = None
    error: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready dict sent on the wire."""
        return self.model_dump(mode="json", exclude_none=True)

    @property
    def status_code(self) -> int:
        return 200 if self.success else 400
