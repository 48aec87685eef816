"""Custom exception hierarchy for storagelink."""

from typing import Any


class StorageLinkError(Exception):
    """Base exception for all storagelink errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(StorageLinkError):
    """Input validation failed."""

    pass


class MalformedNameError(ValidationError):
    """A DNS-encoded name has inconsistent length prefixes."""

    def __init__(
        self,
        message: str,
        offset: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.offset = offset


class ResolutionError(StorageLinkError):
    """Failed to resolve a name."""

    pass


class UnreachableError(ResolutionError):
    """No authoritative node, link target or verifier could be found."""

    pass


class ProofFetchError(ResolutionError):
    """The proof gateway could not answer a fetch request."""

    def __init__(
        self,
        message: str,
        source: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.source = source
        self.status_code = status_code


class NotFoundError(StorageLinkError):
    """Requested record does not exist."""

    pass


class UnauthorizedError(StorageLinkError):
    """Caller may not perform an administrative write."""

    def __init__(
        self,
        message: str,
        caller: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.caller = caller


class StoreError(StorageLinkError):
    """Key-value store operation failed."""

    pass
