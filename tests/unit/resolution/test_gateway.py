"""Tests for the HTTP gateway proof fetcher."""

from __future__ import annotations

import json

import httpx
import pytest
import respx
from httpx import Response

from storagelink.core.exceptions import ProofFetchError
from storagelink.core.models import FetchRequest, StoragePath
from storagelink.resolution.decoder import Carry
from storagelink.resolution.gateway import GatewayProofFetcher

VERIFIER = "0x7777777777777777777777777777777777777777"
TARGET = "0x6666666666666666666666666666666666666666"
PRIMARY = "https://primary.gateway.test/fetch"
FALLBACK = "https://fallback.gateway.test/fetch"
DEFAULT = "https://default.gateway.test/fetch"

REQUEST = FetchRequest(target=TARGET, path=StoragePath(6))


# ============================================================================
# Payload Tests
# ============================================================================


class TestBuildPayload:
    """Tests for the gateway request body."""

    def test_payload_fields(self):
        """Payload should carry verifier, target, path and carry tag."""
        payload = GatewayProofFetcher.build_payload(VERIFIER, REQUEST, Carry.supply())

        assert payload["verifier"] == VERIFIER
        assert payload["target"] == TARGET
        assert payload["slot"] == "0x6"
        assert payload["keys"] == []
        assert payload["dynamic"] is False
        assert payload["storageSlot"] == "0x" + (6).to_bytes(32, "big").hex()
        assert payload["carry"] == "0x18160ddd"

    def test_payload_is_json_serializable(self):
        """Payloads with bytes keys should serialize cleanly."""
        request = FetchRequest(
            target=TARGET,
            path=StoragePath(9, dynamic=True).follow(b"\x01" * 32).follow("avatar"),
        )
        payload = GatewayProofFetcher.build_payload(VERIFIER, request, Carry.supply())

        assert json.loads(json.dumps(payload))["keys"] == ["0x" + "01" * 32, "avatar"]


# ============================================================================
# Fetch Tests
# ============================================================================


class TestGatewayFetch:
    """Tests for GatewayProofFetcher.fetch."""

    @respx.mock
    async def test_success(self, gateway_success_response):
        """A successful gateway answer should parse into a FetchResult."""
        route = respx.post(PRIMARY).mock(
            return_value=Response(200, json=gateway_success_response)
        )

        async with GatewayProofFetcher() as fetcher:
            result = await fetcher.fetch(VERIFIER, REQUEST, Carry.supply(), [PRIMARY])

        assert route.called
        assert result.values == [(3).to_bytes(32, "big")]
        assert result.exit_code == 0
        sent = json.loads(route.calls[0].request.content)
        assert sent["verifier"] == VERIFIER
        assert sent["carry"] == "0x18160ddd"

    @respx.mock
    async def test_falls_back_in_order(self, gateway_success_response):
        """A failing gateway should be skipped in favour of the next one."""
        primary = respx.post(PRIMARY).mock(return_value=Response(503))
        fallback = respx.post(FALLBACK).mock(
            return_value=Response(200, json=gateway_success_response)
        )

        async with GatewayProofFetcher() as fetcher:
            result = await fetcher.fetch(
                VERIFIER, REQUEST, Carry.supply(), [PRIMARY, FALLBACK]
            )

        assert primary.called
        assert fallback.called
        assert result.first == (3).to_bytes(32, "big")

    @respx.mock
    async def test_transport_error_falls_back(self, gateway_empty_response):
        """Connection errors should also fall through to the next gateway."""
        respx.post(PRIMARY).mock(side_effect=httpx.ConnectError("refused"))
        respx.post(FALLBACK).mock(return_value=Response(200, json=gateway_empty_response))

        async with GatewayProofFetcher() as fetcher:
            result = await fetcher.fetch(
                VERIFIER, REQUEST, Carry.supply(), [PRIMARY, FALLBACK]
            )

        assert result.values == []
        assert result.exit_code == 1

    @respx.mock
    async def test_uses_defaults_when_link_has_none(self, gateway_success_response):
        """An empty gateway list should fall back to the configured defaults."""
        route = respx.post(DEFAULT).mock(
            return_value=Response(200, json=gateway_success_response)
        )

        async with GatewayProofFetcher([DEFAULT]) as fetcher:
            await fetcher.fetch(VERIFIER, REQUEST, Carry.supply(), [])

        assert route.called

    @respx.mock
    async def test_link_gateways_override_defaults(self, gateway_success_response):
        """Link gateways should be used instead of the defaults."""
        default = respx.post(DEFAULT).mock(
            return_value=Response(200, json=gateway_success_response)
        )
        primary = respx.post(PRIMARY).mock(
            return_value=Response(200, json=gateway_success_response)
        )

        async with GatewayProofFetcher([DEFAULT]) as fetcher:
            await fetcher.fetch(VERIFIER, REQUEST, Carry.supply(), [PRIMARY])

        assert primary.called
        assert not default.called

    @respx.mock
    async def test_all_fail(self):
        """When every gateway fails a ProofFetchError should be raised."""
        respx.post(PRIMARY).mock(return_value=Response(500))
        respx.post(FALLBACK).mock(return_value=Response(502))

        async with GatewayProofFetcher() as fetcher:
            with pytest.raises(ProofFetchError) as exc_info:
                await fetcher.fetch(VERIFIER, REQUEST, Carry.supply(), [PRIMARY, FALLBACK])

        assert exc_info.value.source == FALLBACK
        assert exc_info.value.status_code == 502

    async def test_invalid_body(self, respx_mock, mock_responses):
        """Non-JSON or mis-shaped answers count as failed gateways."""
        respx_mock.post(PRIMARY).mock(return_value=Response(200, text="not json"))
        respx_mock.post(FALLBACK).mock(
            return_value=mock_responses["json"]({"values": "0x01", "exitCode": "x"})
        )

        async with GatewayProofFetcher() as fetcher:
            with pytest.raises(ProofFetchError):
                await fetcher.fetch(VERIFIER, REQUEST, Carry.supply(), [PRIMARY, FALLBACK])

    @respx.mock
    async def test_error_status_reported(self, mock_responses):
        """The last HTTP status should be attached to the error."""
        respx.post(PRIMARY).mock(return_value=mock_responses["error"](404, "unknown target"))

        async with GatewayProofFetcher() as fetcher:
            with pytest.raises(ProofFetchError) as exc_info:
                await fetcher.fetch(VERIFIER, REQUEST, Carry.supply(), [PRIMARY])

        assert exc_info.value.status_code == 404

    async def test_no_gateways(self):
        """No link gateways and no defaults is a configuration error."""
        fetcher = GatewayProofFetcher()

        with pytest.raises(ProofFetchError) as exc_info:
            await fetcher.fetch(VERIFIER, REQUEST, Carry.supply(), [])

        assert exc_info.value.source == "config"

    async def test_close_is_idempotent(self):
        """Closing twice should be safe."""
        fetcher = GatewayProofFetcher()
        fetcher._get_client()

        await fetcher.close()
        await fetcher.close()
