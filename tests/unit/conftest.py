"""Unit test fixtures with HTTP mocking."""

from __future__ import annotations

from typing import Any

import pytest
import respx
from httpx import Response

# ============================================================================
# HTTP Mocking Fixtures
# ============================================================================


@pytest.fixture
def respx_mock():
    """Provide a respx mock router for HTTP mocking.

    Use this when you need fine-grained control over mocked responses.
    The mock is automatically started and stopped by respx.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


# ============================================================================
# Mock Response Helpers
# ============================================================================


def mock_json_response(data: dict[str, Any], status_code: int = 200) -> Response:
    """Create a mock JSON response."""
    return Response(
        status_code=status_code,
        json=data,
        headers={"Content-Type": "application/json"},
    )


def mock_error_response(status_code: int, message: str = "Error") -> Response:
    """Create a mock error response."""
    return Response(
        status_code=status_code,
        json={"error": message},
        headers={"Content-Type": "application/json"},
    )


@pytest.fixture
def mock_responses():
    """Provide helper functions for creating mock responses."""
    return {
        "json": mock_json_response,
        "error": mock_error_response,
    }


# ============================================================================
# Gateway Response Fixtures
# ============================================================================


@pytest.fixture
def gateway_success_response() -> dict[str, Any]:
    """Gateway answer carrying one 32-byte word (the value 3)."""
    return {
        "values": ["0x" + (3).to_bytes(32, "big").hex()],
        "exitCode": 0,
    }


@pytest.fixture
def gateway_empty_response() -> dict[str, Any]:
    """Gateway answer with no values and a failing exit code."""
    return {"values": [], "exitCode": 1}
