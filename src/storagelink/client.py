"""Main library client for standalone usage."""

from __future__ import annotations

import logging

from storagelink.config import StorageLinkSettings
from storagelink.core.hashing import dns_encode, namehash_at
from storagelink.core.models import Link
from storagelink.core.types import ResolutionProfile
from storagelink.registry.keys import StoreKeys
from storagelink.registry.links import LinkRegistry
from storagelink.registry.ownership import (
    InMemoryOwnershipOracle,
    OwnershipOracle,
    Web3OwnershipOracle,
)
from storagelink.registry.store import InMemoryStore, KeyValueStore, RedisStore
from storagelink.registry.verifiers import VerifierRegistry
from storagelink.resolution.calls import (
    decode_address_result,
    decode_bytes_result,
    decode_text_result,
    encode_call,
)
from storagelink.resolution.dispatch import ProofFetcher
from storagelink.resolution.gateway import GatewayProofFetcher
from storagelink.services.resolver import ResolutionService

logger = logging.getLogger(__name__)


async def create_store(settings: StorageLinkSettings) -> KeyValueStore:
    """Redis store when configured, otherwise in-memory."""
    if settings.redis_url:
        store = RedisStore(str(settings.redis_url))
        await store.connect()
        logger.info("Redis store initialized")
        return store
    logger.info("Using in-memory store")
    return InMemoryStore()


def create_oracle(settings: StorageLinkSettings) -> OwnershipOracle:
    """Web3 oracle when an RPC endpoint is configured, otherwise in-memory."""
    if settings.rpc_url:
        return Web3OwnershipOracle.from_rpc(
            settings.rpc_url,
            settings.ens_registry_address,
            settings.name_wrapper_address,
        )
    logger.warning("No RPC endpoint configured; using an empty in-memory ownership oracle")
    return InMemoryOwnershipOracle()


def _as_wire_name(name: str | bytes) -> bytes:
    return name if isinstance(name, bytes) else dns_encode(name)


class StorageLinkClient:
    """
    Main client for the storagelink library.

    Usage:
        async with StorageLinkClient(oracle=oracle) as client:
            address = await client.addr("slobo.my.chonk")
            description = await client.text("my.chonk", "description")

    Settings are loaded from environment variables or can be passed explicitly.
    """

    def __init__(
        self,
        settings: StorageLinkSettings | None = None,
        *,
        oracle: OwnershipOracle | None = None,
        fetcher: ProofFetcher | None = None,
        store: KeyValueStore | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Application settings. If not provided, loaded from environment.
            oracle: Ownership oracle; built from settings if not provided.
            fetcher: Proof fetcher; a gateway fetcher if not provided.
            store: Record store; built from settings if not provided.
        """
        self._settings = settings or StorageLinkSettings()
        self._oracle = oracle
        self._fetcher = fetcher
        self._store = store
        self._owns_fetcher = fetcher is None
        self._owns_store = store is None
        self._service: ResolutionService | None = None

    async def __aenter__(self) -> StorageLinkClient:
        """Initialize resources on context entry."""
        await self._initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Clean up resources on context exit."""
        await self.close()

    async def _initialize(self) -> None:
        """Initialize client resources."""
        settings = self._settings

        if self._store is None:
            self._store = await create_store(settings)
        if self._oracle is None:
            self._oracle = create_oracle(settings)
        if self._fetcher is None:
            self._fetcher = GatewayProofFetcher(
                settings.gateway_urls,
                timeout=settings.gateway_timeout,
            )

        keys = StoreKeys(settings.store_prefix)
        self._service = ResolutionService(
            self._oracle,
            LinkRegistry(self._store, keys),
            VerifierRegistry(self._store, keys),
            self._fetcher,
            resolver_address=settings.resolver_address,
            owner_address=settings.owner_address,
        )

    async def close(self) -> None:
        """Close all resources this client created."""
        if self._fetcher and self._owns_fetcher:
            await self._fetcher.close()
            self._fetcher = None

        if self._store and self._owns_store:
            await self._store.close()
            self._store = None

        self._service = None

    @property
    def service(self) -> ResolutionService:
        """The underlying resolution service."""
        if self._service is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with StorageLinkClient() as client:'"
            )
        return self._service

    async def resolve(self, name: str | bytes, data: bytes) -> bytes:
        """Resolve raw call data for a dotted or DNS-encoded name."""
        return await self.service.resolve(_as_wire_name(name), data)

    async def addr(self, name: str, coin_type: int | None = None) -> str | bytes | None:
        """
        Address record of a name.

        Without ``coin_type`` returns a checksum address (None if unset);
        with ``coin_type`` returns the raw address bytes for that coin.
        """
        wire = dns_encode(name)
        node = namehash_at(wire)
        if coin_type is None:
            data = encode_call(ResolutionProfile.ADDR, node)
            return decode_address_result(await self.service.resolve(wire, data))

        data = encode_call(ResolutionProfile.ADDR_COIN, node, coin_type=coin_type)
        return decode_bytes_result(await self.service.resolve(wire, data))

    async def text(self, name: str, key: str) -> str:
        """Text record of a name."""
        wire = dns_encode(name)
        data = encode_call(ResolutionProfile.TEXT, namehash_at(wire), key=key)
        return decode_text_result(await self.service.resolve(wire, data))

    async def contenthash(self, name: str) -> bytes:
        """Content hash of a name."""
        wire = dns_encode(name)
        data = encode_call(ResolutionProfile.CONTENTHASH, namehash_at(wire))
        return decode_bytes_result(await self.service.resolve(wire, data))

    async def set_link(self, caller: str, node: bytes, link: Link) -> Link:
        return await self.service.set_link(caller, node, link)

    async def set_verifier(self, caller: str, chain_id: int, verifier: str | None) -> None:
        await self.service.set_verifier(caller, chain_id, verifier)

    async def get_link(self, node: bytes) -> Link | None:
        return await self.service.get_link(node)
