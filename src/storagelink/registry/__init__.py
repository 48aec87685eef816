"""Link and verifier registries, their stores, and the ownership gate."""

from storagelink.registry.keys import StoreKeys
from storagelink.registry.links import LinkRegistry
from storagelink.registry.ownership import (
    InMemoryOwnershipOracle,
    OwnershipOracle,
    Web3OwnershipOracle,
    is_authorised,
)
from storagelink.registry.store import InMemoryStore, KeyValueStore, RedisStore
from storagelink.registry.verifiers import VerifierRegistry

__all__ = [
    # Stores
    "InMemoryStore",
    "KeyValueStore",
    "RedisStore",
    "StoreKeys",
    # Registries
    "LinkRegistry",
    "VerifierRegistry",
    # Ownership
    "InMemoryOwnershipOracle",
    "OwnershipOracle",
    "Web3OwnershipOracle",
    "is_authorised",
]
