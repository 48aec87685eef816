"""Resolution service: the per-call state machine and the administrative surface."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from storagelink.core.exceptions import UnauthorizedError, UnreachableError
from storagelink.core.models import Link, address_bytes, to_address
from storagelink.core.types import AnswerSource, ResolutionProfile
from storagelink.registry.ownership import is_authorised
from storagelink.resolution.calls import (
    PLACEHOLDER_RESULT,
    ResolutionCall,
    decode_call,
    encode_address_result,
    encode_bytes_result,
)
from storagelink.resolution.dispatch import RequestDispatcher
from storagelink.resolution.slots import ShortCircuit, plan_lookup
from storagelink.resolution.walker import NameWalker, subdomain_label_hash

if TYPE_CHECKING:
    from storagelink.registry.links import LinkRegistry
    from storagelink.registry.ownership import OwnershipOracle
    from storagelink.registry.verifiers import VerifierRegistry
    from storagelink.resolution.dispatch import ProofFetcher

logger = logging.getLogger(__name__)


class ResolutionService:
    """
    Resolves names whose records live in a linked remote registry.

    Each call runs:
    1. Locate the authoritative ancestor of the name
    2. Look up its link record
    3. Answer locally, or build the remote storage path
    4. Dispatch one proof fetch and decode the result
    """

    def __init__(
        self,
        oracle: "OwnershipOracle",
        links: "LinkRegistry",
        verifiers: "VerifierRegistry",
        fetcher: "ProofFetcher",
        *,
        resolver_address: str,
        owner_address: str | None = None,
    ) -> None:
        """
        Initialize the resolution service.

        Args:
            oracle: Registry view for resolver lookups and ownership checks
            links: Link records by node
            verifiers: Default verifiers by chain id
            fetcher: Proof-fetch capability
            resolver_address: Address the registry lists for linked nodes
            owner_address: Privileged owner for default verifier writes
        """
        self._oracle = oracle
        self._links = links
        self._verifiers = verifiers
        self._walker = NameWalker(oracle, resolver_address)
        self._dispatcher = RequestDispatcher(fetcher, verifiers)
        self._owner = to_address(owner_address)

    @property
    def resolver_address(self) -> str:
        return self._walker.resolver_address

    async def resolve(self, name: bytes, data: bytes) -> bytes:
        """
        Resolve a DNS-encoded name for a resolver call.

        Args:
            name: DNS wire-format name
            data: Resolver call data (selector + ABI arguments)

        Returns:
            The ABI-encoded result expected by the call's profile

        Raises:
            ValidationError: malformed call data or name
            UnreachableError: no authoritative node, link target or verifier
        """
        call = decode_call(data)

        node, offset = await self._walker.find_owning_node(name)

        link = await self._links.get(node)
        if link is None or not link.is_resolvable:
            raise UnreachableError(
                "No link target for authoritative node",
                details={"node": node.hex()},
            )

        label_hash = subdomain_label_hash(name, offset)
        plan = plan_lookup(call, label_hash, link.chain_id)

        if isinstance(plan, ShortCircuit):
            logger.debug(f"Short-circuit {plan.source} for node {node.hex()}")
            return await self._answer_locally(plan.source, call, link)

        return await self._dispatcher.dispatch(link, plan.path, plan.carry)

    async def _answer_locally(
        self,
        source: AnswerSource,
        call: ResolutionCall,
        link: Link,
    ) -> bytes:
        if source == AnswerSource.PLACEHOLDER:
            return PLACEHOLDER_RESULT

        if source == AnswerSource.VERIFIER:
            verifier = address_bytes(await self._dispatcher.resolve_verifier(link))
            if call.profile == ResolutionProfile.ADDR:
                return encode_address_result(verifier)
            return encode_bytes_result(verifier)

        if source == AnswerSource.TARGET:
            return encode_bytes_result(address_bytes(link.target))

        return encode_bytes_result(b"")

    # Administration

    async def set_verifier(self, caller: str, chain_id: int, verifier: str | None) -> None:
        """Set the default verifier for a chain. Owner only."""
        caller_address = to_address(caller)
        if self._owner is None or caller_address != self._owner:
            raise UnauthorizedError(
                "Only the owner may set default verifiers",
                caller=str(caller),
                details={"chain_id": chain_id},
            )

        await self._verifiers.put(chain_id, verifier)
        logger.info(f"Default verifier for chain {chain_id} set to {verifier}")

    async def set_link(self, caller: str, node: bytes, link: Link) -> Link:
        """Replace the link for a node. Requires node authorisation."""
        if not await is_authorised(self._oracle, node, caller):
            raise UnauthorizedError(
                "Caller is not authorised for node",
                caller=str(caller),
                details={"node": node.hex()},
            )

        await self._links.put(node, link)
        logger.info(
            f"Link for {node.hex()} set to chain {link.chain_id} target {link.target}"
        )
        return link

    async def get_link(self, node: bytes) -> Link | None:
        """Get the link for a node."""
        return await self._links.get(node)

    async def get_verifier(self, chain_id: int) -> str | None:
        """Get the default verifier for a chain."""
        return await self._verifiers.get(chain_id)
