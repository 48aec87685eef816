"""Response schemas for API endpoints."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from storagelink.api.schemas.base import APIBaseSchema, to_hex
from storagelink.core.models import Link


class ResolveResponse(APIBaseSchema):
    """ABI-encoded resolver output."""

    data: str


class LinkResponse(APIBaseSchema):
    """Link record of a node."""

    node: str
    chain_id: int
    target: str | None = None
    verifier: str | None = None
    gateways: list[str] = Field(default_factory=list)

    @classmethod
    def from_link(cls, node: bytes, link: Link) -> "LinkResponse":
        return cls(
            node=to_hex(node),
            chain_id=link.chain_id,
            target=link.target,
            verifier=link.verifier,
            gateways=list(link.gateways),
        )


class VerifierResponse(APIBaseSchema):
    """Default verifier of a chain."""

    chain_id: int
    verifier: str | None = None


class HealthResponse(APIBaseSchema):
    """Health check response."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    services: dict[str, Literal["up", "down", "unknown"]] = Field(default_factory=dict)
