"""Ownership oracle used to gate administrative writes and locate the resolver."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from web3 import AsyncHTTPProvider, AsyncWeb3, Web3

from storagelink.core.models import to_address

logger = logging.getLogger(__name__)


class OwnershipOracle(ABC):
    """Read-only view of the name registry and its wrapping layer."""

    @abstractmethod
    async def owner_of(self, node: bytes) -> str | None:
        """Registry owner of a node."""
        ...

    @abstractmethod
    async def is_approved_for_all(self, owner: str, operator: str) -> bool:
        """Whether ``operator`` may act for every node of ``owner``."""
        ...

    @abstractmethod
    async def can_modify_wrapped_name(self, node: bytes, operator: str) -> bool:
        """Whether ``operator`` may modify ``node`` through the wrapping layer."""
        ...

    @abstractmethod
    async def configured_resolver(self, node: bytes) -> str | None:
        """Resolver configured for a node in the registry."""
        ...


async def is_authorised(oracle: OwnershipOracle, node: bytes, caller: str) -> bool:
    """True if ``caller`` owns ``node``, is approved by its owner, or may modify it wrapped."""
    caller_address = to_address(caller)
    if caller_address is None:
        return False

    owner = await oracle.owner_of(node)
    if owner is not None:
        if owner == caller_address:
            return True
        if await oracle.is_approved_for_all(owner, caller_address):
            return True

    return await oracle.can_modify_wrapped_name(node, caller_address)


class InMemoryOwnershipOracle(OwnershipOracle):
    """Dictionary-backed oracle for tests and local runs."""

    def __init__(self) -> None:
        self._owners: dict[bytes, str] = {}
        self._resolvers: dict[bytes, str] = {}
        self._approvals: set[tuple[str, str]] = set()
        self._wrapped_operators: set[tuple[bytes, str]] = set()

    def set_owner(self, node: bytes, owner: str) -> None:
        self._owners[node] = to_address(owner)

    def set_resolver(self, node: bytes, resolver: str) -> None:
        self._resolvers[node] = to_address(resolver)

    def set_approval_for_all(self, owner: str, operator: str, approved: bool = True) -> None:
        pair = (to_address(owner), to_address(operator))
        if approved:
            self._approvals.add(pair)
        else:
            self._approvals.discard(pair)

    def allow_wrapped(self, node: bytes, operator: str) -> None:
        self._wrapped_operators.add((node, to_address(operator)))

    async def owner_of(self, node: bytes) -> str | None:
        return self._owners.get(node)

    async def is_approved_for_all(self, owner: str, operator: str) -> bool:
        return (to_address(owner), to_address(operator)) in self._approvals

    async def can_modify_wrapped_name(self, node: bytes, operator: str) -> bool:
        return (node, to_address(operator)) in self._wrapped_operators

    async def configured_resolver(self, node: bytes) -> str | None:
        return self._resolvers.get(node)


ENS_REGISTRY_ABI: list[dict[str, Any]] = [
    {
        "name": "owner",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "node", "type": "bytes32"}],
        "outputs": [{"name": "", "type": "address"}],
    },
    {
        "name": "resolver",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "node", "type": "bytes32"}],
        "outputs": [{"name": "", "type": "address"}],
    },
    {
        "name": "isApprovedForAll",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "operator", "type": "address"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
]

NAME_WRAPPER_ABI: list[dict[str, Any]] = [
    {
        "name": "canModifyName",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "node", "type": "bytes32"},
            {"name": "addr", "type": "address"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
]


class Web3OwnershipOracle(OwnershipOracle):
    """
    Oracle backed by the ENS registry and NameWrapper contracts.

    Names owned by the NameWrapper are checked with ``canModifyName``;
    every other owner is answered by the registry alone.
    """

    def __init__(self, registry_contract: Any, wrapper_contract: Any) -> None:
        self._registry = registry_contract
        self._wrapper = wrapper_contract
        self._wrapper_address = to_address(wrapper_contract.address)

    @classmethod
    def from_rpc(
        cls,
        rpc_url: str,
        registry_address: str,
        wrapper_address: str,
    ) -> "Web3OwnershipOracle":
        """Create an oracle talking to an RPC endpoint."""
        w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))
        registry = w3.eth.contract(
            address=Web3.to_checksum_address(registry_address),
            abi=ENS_REGISTRY_ABI,
        )
        wrapper = w3.eth.contract(
            address=Web3.to_checksum_address(wrapper_address),
            abi=NAME_WRAPPER_ABI,
        )
        return cls(registry, wrapper)

    async def owner_of(self, node: bytes) -> str | None:
        return to_address(await self._registry.functions.owner(node).call())

    async def is_approved_for_all(self, owner: str, operator: str) -> bool:
        return bool(
            await self._registry.functions.isApprovedForAll(owner, operator).call()
        )

    async def can_modify_wrapped_name(self, node: bytes, operator: str) -> bool:
        if await self.owner_of(node) != self._wrapper_address:
            return False
        allowed = bool(await self._wrapper.functions.canModifyName(node, operator).call())
        logger.debug(f"Wrapped name check for {node.hex()} by {operator}: {allowed}")
        return allowed

    async def configured_resolver(self, node: bytes) -> str | None:
        return to_address(await self._registry.functions.resolver(node).call())
