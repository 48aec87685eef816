"""Shared test fixtures for all tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from storagelink.config import StorageLinkSettings
from storagelink.core.hashing import namehash
from storagelink.core.models import FetchRequest, FetchResult, Link, StoragePath
from storagelink.registry.links import LinkRegistry
from storagelink.registry.ownership import InMemoryOwnershipOracle
from storagelink.registry.store import InMemoryStore
from storagelink.registry.verifiers import VerifierRegistry
from storagelink.resolution.decoder import Carry
from storagelink.resolution.dispatch import ProofFetcher
from storagelink.services.resolver import ResolutionService

# ============================================================================
# Test Data Constants
# ============================================================================

# Digit-only addresses are already in checksum form.
RESOLVER_ADDRESS = "0x1111111111111111111111111111111111111111"
ADMIN_ADDRESS = "0x2222222222222222222222222222222222222222"
NODE_OWNER = "0x3333333333333333333333333333333333333333"
OPERATOR = "0x4444444444444444444444444444444444444444"
STRANGER = "0x5555555555555555555555555555555555555555"
TARGET_ADDRESS = "0x6666666666666666666666666666666666666666"
LINK_VERIFIER = "0x7777777777777777777777777777777777777777"
DEFAULT_VERIFIER = "0x8888888888888888888888888888888888888888"
SUBNAME_ADDRESS = "0x9999999999999999999999999999999999999999"

CHAIN_ID = 8453
BASE_NAME = "my.chonk"
BASE_NODE = namehash(BASE_NAME)


# ============================================================================
# Fake Proof Engine
# ============================================================================


class StorageProofFetcher(ProofFetcher):
    """Answers fetches from an in-memory map of (target, storage slot) -> value."""

    def __init__(self) -> None:
        self.storage: dict[tuple[str, int], bytes] = {}
        self.calls: list[tuple[str, FetchRequest, Carry, tuple[str, ...]]] = []
        self.exit_code = 0

    def write(self, target: str, path: StoragePath, value: bytes) -> None:
        self.storage[(target, path.storage_slot())] = value

    async def fetch(
        self,
        verifier: str,
        request: FetchRequest,
        carry: Carry,
        gateways: Sequence[str],
    ) -> FetchResult:
        self.calls.append((verifier, request, carry, tuple(gateways)))
        value = self.storage.get((request.target, request.path.storage_slot()))
        return FetchResult(
            values=[value] if value is not None else [],
            exit_code=self.exit_code,
        )


# ============================================================================
# Registry Fixtures
# ============================================================================


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def links(store: InMemoryStore) -> LinkRegistry:
    return LinkRegistry(store)


@pytest.fixture
def verifiers(store: InMemoryStore) -> VerifierRegistry:
    return VerifierRegistry(store)


@pytest.fixture
def oracle() -> InMemoryOwnershipOracle:
    """Oracle where my.chonk is owned by NODE_OWNER and uses the resolver."""
    oracle = InMemoryOwnershipOracle()
    oracle.set_owner(BASE_NODE, NODE_OWNER)
    oracle.set_resolver(BASE_NODE, RESOLVER_ADDRESS)
    return oracle


@pytest.fixture
def fetcher() -> StorageProofFetcher:
    return StorageProofFetcher()


@pytest.fixture
def base_link() -> Link:
    """Link with no verifier override (chain default applies)."""
    return Link(chain_id=CHAIN_ID, target=TARGET_ADDRESS)


@pytest.fixture
async def service(
    oracle: InMemoryOwnershipOracle,
    links: LinkRegistry,
    verifiers: VerifierRegistry,
    fetcher: StorageProofFetcher,
    base_link: Link,
) -> ResolutionService:
    """Service with my.chonk linked and a default verifier for CHAIN_ID."""
    await links.put(BASE_NODE, base_link)
    await verifiers.put(CHAIN_ID, DEFAULT_VERIFIER)
    return ResolutionService(
        oracle,
        links,
        verifiers,
        fetcher,
        resolver_address=RESOLVER_ADDRESS,
        owner_address=ADMIN_ADDRESS,
    )


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def mock_settings() -> StorageLinkSettings:
    """Create settings for testing without external services."""
    return StorageLinkSettings(
        redis_url=None,
        resolver_address=RESOLVER_ADDRESS,
        owner_address=ADMIN_ADDRESS,
        rpc_url=None,
        gateway_urls=["https://gateway.test/fetch"],
        gateway_timeout=5.0,
        debug=True,
        log_level="DEBUG",
    )
