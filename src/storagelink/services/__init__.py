"""Service layer orchestrating resolution and administration."""

from storagelink.services.resolver import ResolutionService

__all__ = ["ResolutionService"]
