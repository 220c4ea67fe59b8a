"""Error response schema."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    error: str
    details: list[str] = []
