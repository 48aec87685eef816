"""Base schema configuration for API models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


def to_camel_case(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(word.capitalize() for word in components[1:])


def parse_hex(value: str) -> bytes:
    """Decode a 0x-prefixed hex string."""
    if not value.startswith("0x"):
        raise ValueError("Hex value must start with 0x")
    return bytes.fromhex(value[2:])


def to_hex(value: bytes) -> str:
    return "0x" + value.hex()


class APIBaseSchema(BaseModel):
    """
    Base schema for all API models.

    Configured with camelCase aliases for TypeScript-friendly JSON serialization.
    """

    model_config = ConfigDict(
        alias_generator=to_camel_case,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorDetail(APIBaseSchema):
    """Error detail for API responses."""

    code: str
    message: str
    field: str | None = None
    details: dict[str, Any] | None = None


class APIError(APIBaseSchema):
    """Standard API error response."""

    error: ErrorDetail
