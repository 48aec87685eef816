"""Issue the single proof-fetch request of a resolution call."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from storagelink.core.exceptions import UnreachableError
from storagelink.core.models import FetchRequest, FetchResult, Link, StoragePath
from storagelink.registry.verifiers import VerifierRegistry
from storagelink.resolution.decoder import Carry, decode_response

logger = logging.getLogger(__name__)


class ProofFetcher(ABC):
    """Capability that proves and returns remote storage values."""

    @abstractmethod
    async def fetch(
        self,
        verifier: str,
        request: FetchRequest,
        carry: Carry,
        gateways: Sequence[str],
    ) -> FetchResult:
        """
        Prove ``request`` through ``verifier``.

        Args:
            verifier: Verifier address that checks the proof
            request: Target and storage path to read
            carry: Decode context, passed through untouched
            gateways: Gateway endpoints; empty means the fetcher's defaults

        Returns:
            The proven values and the request's exit code
        """
        ...

    async def close(self) -> None:
        pass


class RequestDispatcher:
    """Selects the verifier for a link and awaits exactly one fetch."""

    def __init__(self, fetcher: ProofFetcher, verifiers: VerifierRegistry) -> None:
        self._fetcher = fetcher
        self._verifiers = verifiers

    async def resolve_verifier(self, link: Link) -> str:
        """Link override, else the chain default, else Unreachable."""
        if link.verifier is not None:
            return link.verifier
        verifier = await self._verifiers.get(link.chain_id)
        if verifier is None:
            raise UnreachableError(
                f"No verifier for chain {link.chain_id}",
                details={"chain_id": link.chain_id},
            )
        return verifier

    async def dispatch(self, link: Link, path: StoragePath, carry: Carry) -> bytes:
        """Fetch ``path`` from ``link.target`` and decode it per ``carry``."""
        if link.target is None:
            raise UnreachableError("Link has no target")

        verifier = await self.resolve_verifier(link)
        request = FetchRequest(target=link.target, path=path)

        logger.debug(
            f"Fetching slot {path.slot} keys={len(path.keys)} from {link.target} "
            f"via {verifier} (mode={carry.mode})"
        )
        result = await self._fetcher.fetch(verifier, request, carry, link.gateways)

        if result.exit_code != 0:
            logger.warning(
                f"Proof fetch for {link.target} returned exit code {result.exit_code}"
            )

        return decode_response(result.values, carry)
