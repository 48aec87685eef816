"""Resolution endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from storagelink.api.dependencies import ResolveService
from storagelink.api.schemas import ResolveRequest, ResolveResponse, parse_hex, to_hex
from storagelink.core.hashing import dns_encode

router = APIRouter(prefix="/resolve", tags=["resolve"])


@router.post(
    "",
    response_model=ResolveResponse,
    operation_id="resolve",
    summary="Resolve a name",
    description=(
        "Resolve a resolver call (addr, text, contenthash) for a name. "
        "Returns the ABI-encoded result."
    ),
)
async def resolve(
    request: ResolveRequest,
    resolution_service: ResolveService,
) -> ResolveResponse:
    """Resolve a name through its linked remote registry."""
    if request.dns_name is not None:
        name = parse_hex(request.dns_name)
    else:
        name = dns_encode(request.name)

    result = await resolution_service.resolve(name, parse_hex(request.data))
    return ResolveResponse(data=to_hex(result))
