"""Storagelink - resolve names to records held behind a storage-proof gateway."""

from storagelink.client import StorageLinkClient
from storagelink.core.exceptions import (
    MalformedNameError,
    StorageLinkError,
    UnauthorizedError,
    UnreachableError,
)
from storagelink.core.hashing import dns_encode, namehash
from storagelink.core.models import Link
from storagelink.core.types import DecodeMode, ResolutionProfile
from storagelink.services.resolver import ResolutionService

__version__ = "0.1.0"
__all__ = [
    # Client
    "ResolutionService",
    "StorageLinkClient",
    # Types
    "DecodeMode",
    "Link",
    "ResolutionProfile",
    # Names
    "dns_encode",
    "namehash",
    # Errors
    "MalformedNameError",
    "StorageLinkError",
    "UnauthorizedError",
    "UnreachableError",
    # Version
    "__version__",
]
