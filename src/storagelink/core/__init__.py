"""Core types, models, and utilities."""

from .exceptions import (
    MalformedNameError,
    NotFoundError,
    ProofFetchError,
    ResolutionError,
    StorageLinkError,
    StoreError,
    UnauthorizedError,
    UnreachableError,
    ValidationError,
)
from .hashing import (
    EMPTY_NODE,
    dns_decode,
    dns_encode,
    keccak,
    label_hash,
    namehash,
    namehash_at,
    split_labels,
    suffix_nodes,
)
from .models import FetchRequest, FetchResult, Link, StoragePath, address_bytes, to_address
from .types import (
    COIN_TYPE_ETH,
    EVM_COIN_TYPE_BIT,
    ZERO_ADDRESS,
    AnswerSource,
    DecodeMode,
    ResolutionProfile,
    evm_coin_type,
)

__all__ = [
    # Types
    "AnswerSource",
    "COIN_TYPE_ETH",
    "DecodeMode",
    "EVM_COIN_TYPE_BIT",
    "ResolutionProfile",
    "ZERO_ADDRESS",
    "evm_coin_type",
    # Hashing
    "EMPTY_NODE",
    "dns_decode",
    "dns_encode",
    "keccak",
    "label_hash",
    "namehash",
    "namehash_at",
    "split_labels",
    "suffix_nodes",
    # Models
    "FetchRequest",
    "FetchResult",
    "Link",
    "StoragePath",
    "address_bytes",
    "to_address",
    # Exceptions
    "MalformedNameError",
    "NotFoundError",
    "ProofFetchError",
    "ResolutionError",
    "StorageLinkError",
    "StoreError",
    "UnauthorizedError",
    "UnreachableError",
    "ValidationError",
]
