"""Error response schema shared by all endpoints."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body returned for every handled error.

    Attributes:
        error: Short error category (e.g., 'Conflict').
        detail: Human-readable message.
        invalid_names: Unknown permission names, on validation errors only.
    """

    error: str
    detail: str
    invalid_names: list[str] | None = None
