"""Inbound resolver call data and the ABI encoding of its results."""

from __future__ import annotations

from dataclasses import dataclass

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from web3 import Web3

from storagelink.core.exceptions import ValidationError
from storagelink.core.types import ResolutionProfile

# Returned for selectors the resolver does not implement.
PLACEHOLDER_RESULT = bytes(64)

_ARGUMENT_TYPES: dict[ResolutionProfile, list[str]] = {
    ResolutionProfile.ADDR: ["bytes32"],
    ResolutionProfile.ADDR_COIN: ["bytes32", "uint256"],
    ResolutionProfile.TEXT: ["bytes32", "string"],
    ResolutionProfile.CONTENTHASH: ["bytes32"],
}


@dataclass(frozen=True)
class ResolutionCall:
    """A decoded resolver call."""

    selector: bytes
    profile: ResolutionProfile | None
    node: bytes | None = None
    coin_type: int | None = None
    key: str | None = None


def decode_call(data: bytes) -> ResolutionCall:
    """
    Decode resolver call data (4-byte selector followed by ABI arguments).

    Unknown selectors decode with ``profile=None`` and no arguments.
    """
    if len(data) < 4:
        raise ValidationError(
            f"Call data must be at least 4 bytes, got {len(data)}",
        )

    selector = bytes(data[:4])
    profile = ResolutionProfile.from_selector(selector)
    if profile is None:
        return ResolutionCall(selector=selector, profile=None)

    try:
        args = decode(_ARGUMENT_TYPES[profile], bytes(data[4:]))
    except (DecodingError, UnicodeDecodeError) as e:
        raise ValidationError(
            f"Invalid arguments for {profile.signature}: {e}",
            details={"selector": selector.hex()},
        ) from e

    node = args[0]
    if profile == ResolutionProfile.ADDR_COIN:
        return ResolutionCall(selector, profile, node, coin_type=args[1])
    if profile == ResolutionProfile.TEXT:
        return ResolutionCall(selector, profile, node, key=args[1])
    return ResolutionCall(selector, profile, node)


def encode_call(
    profile: ResolutionProfile,
    node: bytes,
    *,
    coin_type: int | None = None,
    key: str | None = None,
) -> bytes:
    """Build call data for a resolver function."""
    if profile == ResolutionProfile.ADDR_COIN:
        if coin_type is None:
            raise ValidationError("coin_type is required for addr(bytes32,uint256)")
        args: list = [node, coin_type]
    elif profile == ResolutionProfile.TEXT:
        if key is None:
            raise ValidationError("key is required for text(bytes32,string)")
        args = [node, key]
    else:
        args = [node]
    return profile.selector + encode(_ARGUMENT_TYPES[profile], args)


# Result encoders


def encode_address_result(address: bytes) -> bytes:
    """``abi.encode(address)`` from raw bytes; the last 20 bytes are used."""
    return encode(["address"], [address.rjust(20, b"\x00")[-20:]])


def encode_bytes_result(value: bytes) -> bytes:
    """``abi.encode(bytes)``; identical to ``abi.encode(string)`` for UTF-8 text."""
    return encode(["bytes"], [value])


def encode_text_result(value: str) -> bytes:
    return encode(["string"], [value])


# Result decoders


def decode_address_result(result: bytes) -> str | None:
    """Checksum address from an ``addr(bytes32)`` result; zero address gives None."""
    (address,) = decode(["address"], result)
    address = Web3.to_checksum_address(address)
    if int(address, 16) == 0:
        return None
    return address


def decode_bytes_result(result: bytes) -> bytes:
    (value,) = decode(["bytes"], result)
    return value


def decode_text_result(result: bytes) -> str:
    (value,) = decode(["string"], result)
    return value
