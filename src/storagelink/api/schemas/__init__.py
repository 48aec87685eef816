"""API schema definitions."""

from storagelink.api.schemas.base import (
    APIBaseSchema,
    APIError,
    ErrorDetail,
    parse_hex,
    to_hex,
)
from storagelink.api.schemas.requests import (
    ResolveRequest,
    SetLinkRequest,
    SetVerifierRequest,
)
from storagelink.api.schemas.responses import (
    HealthResponse,
    LinkResponse,
    ResolveResponse,
    VerifierResponse,
)

__all__ = [
    # Base
    "APIBaseSchema",
    "APIError",
    "ErrorDetail",
    "parse_hex",
    "to_hex",
    # Requests
    "ResolveRequest",
    "SetLinkRequest",
    "SetVerifierRequest",
    # Responses
    "HealthResponse",
    "LinkResponse",
    "ResolveResponse",
    "VerifierResponse",
]
