"""Administrative endpoints for link and verifier records."""

from __future__ import annotations

import re

from fastapi import APIRouter

from storagelink.api.dependencies import Caller, ResolveService
from storagelink.api.schemas import (
    LinkResponse,
    SetLinkRequest,
    SetVerifierRequest,
    VerifierResponse,
)
from storagelink.core.exceptions import NotFoundError, ValidationError
from storagelink.core.models import Link

router = APIRouter(tags=["links"])

_NODE_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")


def _parse_node(node: str) -> bytes:
    if not _NODE_PATTERN.match(node):
        raise ValidationError(
            "Node must be 0x-prefixed 32-byte hex",
            details={"node": node},
        )
    return bytes.fromhex(node[2:])


@router.get(
    "/links/{node}",
    response_model=LinkResponse,
    operation_id="getLink",
    summary="Get link record",
    description="Get the link record of an authoritative node.",
)
async def get_link(node: str, resolution_service: ResolveService) -> LinkResponse:
    """Get the link record of a node."""
    node_bytes = _parse_node(node)
    link = await resolution_service.get_link(node_bytes)
    if link is None:
        raise NotFoundError("No link for node", details={"node": node})
    return LinkResponse.from_link(node_bytes, link)


@router.put(
    "/links/{node}",
    response_model=LinkResponse,
    operation_id="setLink",
    summary="Set link record",
    description="Replace the link record of a node. Requires node ownership or approval.",
)
async def set_link(
    node: str,
    request: SetLinkRequest,
    resolution_service: ResolveService,
    caller: Caller,
) -> LinkResponse:
    """Replace the link record of a node."""
    node_bytes = _parse_node(node)
    try:
        link = Link(
            chain_id=request.chain_id,
            target=request.target,
            verifier=request.verifier,
            gateways=tuple(request.gateways),
        )
    except ValueError as e:
        raise ValidationError(f"Invalid link: {e}") from e

    stored = await resolution_service.set_link(caller, node_bytes, link)
    return LinkResponse.from_link(node_bytes, stored)


@router.get(
    "/verifiers/{chain_id}",
    response_model=VerifierResponse,
    operation_id="getVerifier",
    summary="Get default verifier",
    description="Get the default verifier of a chain.",
)
async def get_verifier(chain_id: int, resolution_service: ResolveService) -> VerifierResponse:
    """Get the default verifier of a chain."""
    verifier = await resolution_service.get_verifier(chain_id)
    return VerifierResponse(chain_id=chain_id, verifier=verifier)


@router.put(
    "/verifiers/{chain_id}",
    response_model=VerifierResponse,
    operation_id="setVerifier",
    summary="Set default verifier",
    description="Set the default verifier of a chain. Owner only.",
)
async def set_verifier(
    chain_id: int,
    request: SetVerifierRequest,
    resolution_service: ResolveService,
    caller: Caller,
) -> VerifierResponse:
    """Set the default verifier of a chain."""
    await resolution_service.set_verifier(caller, chain_id, request.verifier)
    verifier = await resolution_service.get_verifier(chain_id)
    return VerifierResponse(chain_id=chain_id, verifier=verifier)
