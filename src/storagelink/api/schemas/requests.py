"""Request schemas for API endpoints."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, model_validator

from storagelink.api.schemas.base import APIBaseSchema

HexString = Annotated[str, Field(pattern=r"^0x([0-9a-fA-F]{2})*$")]
DottedName = Annotated[str, Field(min_length=1, max_length=1000)]


class ResolveRequest(APIBaseSchema):
    """Request to resolve a name for a resolver call."""

    name: Annotated[
        DottedName | None,
        Field(
            default=None,
            description="Dotted name, e.g. 'slobo.my.chonk'.",
        ),
    ]

    dns_name: Annotated[
        HexString | None,
        Field(
            default=None,
            description="DNS wire-format name as 0x-prefixed hex.",
        ),
    ]

    data: Annotated[
        HexString,
        Field(description="Resolver call data as 0x-prefixed hex."),
    ]

    @model_validator(mode="after")
    def _one_name(self) -> "ResolveRequest":
        if (self.name is None) == (self.dns_name is None):
            raise ValueError("Exactly one of name or dnsName is required")
        return self


class SetLinkRequest(APIBaseSchema):
    """Request to replace the link record of a node."""

    chain_id: Annotated[int, Field(ge=0, description="Remote chain id.")]

    target: Annotated[
        str | None,
        Field(default=None, description="Remote registry address."),
    ]

    verifier: Annotated[
        str | None,
        Field(default=None, description="Verifier override; omit for the chain default."),
    ]

    gateways: Annotated[
        list[str],
        Field(default_factory=list, description="Gateway URLs; empty for defaults."),
    ]


class SetVerifierRequest(APIBaseSchema):
    """Request to set the default verifier of a chain."""

    verifier: Annotated[
        str | None,
        Field(default=None, description="Verifier address; null clears the default."),
    ]
