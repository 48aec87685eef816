"""Turn proof results back into resolver outputs."""

from __future__ import annotations

from dataclasses import dataclass

from storagelink.core.types import DecodeMode, ResolutionProfile
from storagelink.resolution.calls import (
    encode_address_result,
    encode_bytes_result,
    encode_text_result,
)

# totalSupply() selector; tags a subdomain-count read.
SUPPLY_TAG = bytes.fromhex("18160ddd")


@dataclass(frozen=True)
class Carry:
    """
    Context carried unchanged through a proof fetch.

    ``tag`` is the 4-byte wire form sent to gateways; ``mode`` is what the
    decoder acts on.
    """

    mode: DecodeMode
    tag: bytes

    @classmethod
    def for_profile(cls, profile: ResolutionProfile) -> "Carry":
        if profile == ResolutionProfile.ADDR:
            return cls(DecodeMode.ADDRESS, profile.selector)
        return cls(DecodeMode.PASSTHROUGH, profile.selector)

    @classmethod
    def supply(cls) -> "Carry":
        return cls(DecodeMode.SUPPLY, SUPPLY_TAG)


def decode_response(values: list[bytes], carry: Carry) -> bytes:
    """
    Produce the resolver output for proven ``values``.

    Only the first value is used; a missing value decodes as empty.
    """
    first = values[0] if values else b""

    if carry.mode == DecodeMode.ADDRESS:
        return encode_address_result(first)

    if carry.mode == DecodeMode.SUPPLY:
        count = int.from_bytes(first, "big") if first else 0
        return encode_text_result(f"{count} subdomains")

    return encode_bytes_result(first)
