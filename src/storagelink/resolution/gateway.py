"""Proof fetcher that asks HTTP gateways to prove storage reads."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from storagelink.core.exceptions import ProofFetchError
from storagelink.core.models import FetchRequest, FetchResult
from storagelink.resolution.decoder import Carry
from storagelink.resolution.dispatch import ProofFetcher

logger = logging.getLogger(__name__)


class GatewayProofFetcher(ProofFetcher):
    """
    Posts fetch requests to proof gateways.

    Gateways are tried in order and the first successful answer wins.
    Request body::

        {"verifier": "0x..", "target": "0x..", "slot": "0x6", "keys": [...],
         "dynamic": false, "storageSlot": "0x..", "carry": "0x18160ddd"}

    Response body::

        {"values": ["0x.."], "exitCode": 0}
    """

    def __init__(
        self,
        default_gateways: Sequence[str] = (),
        *,
        timeout: float = 30.0,
    ) -> None:
        self._default_gateways = tuple(default_gateways)
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                headers={
                    "User-Agent": "storagelink/0.1",
                    "Accept": "application/json",
                },
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    @staticmethod
    def build_payload(verifier: str, request: FetchRequest, carry: Carry) -> dict[str, Any]:
        return {
            "verifier": verifier,
            "target": request.target,
            **request.path.to_json(),
            "carry": "0x" + carry.tag.hex(),
        }

    async def fetch(
        self,
        verifier: str,
        request: FetchRequest,
        carry: Carry,
        gateways: Sequence[str],
    ) -> FetchResult:
        urls = list(gateways) or list(self._default_gateways)
        if not urls:
            raise ProofFetchError("No gateways configured", source="config")

        payload = self.build_payload(verifier, request, carry)
        client = self._get_client()
        last_error: Exception | None = None
        status_code: int | None = None

        for url in urls:
            try:
                response = await client.post(url, json=payload)
                response.raise_for_status()
                return FetchResult.model_validate(response.json())
            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                logger.warning(f"Gateway {url} returned {status_code}")
                last_error = e
            except httpx.HTTPError as e:
                logger.warning(f"Gateway {url} failed: {e}")
                last_error = e
            except (ValueError, PydanticValidationError) as e:
                logger.warning(f"Gateway {url} sent an invalid response: {e}")
                last_error = e

        raise ProofFetchError(
            f"All {len(urls)} gateway(s) failed: {last_error}",
            source=urls[-1],
            status_code=status_code,
        ) from last_error

    async def __aenter__(self) -> "GatewayProofFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
