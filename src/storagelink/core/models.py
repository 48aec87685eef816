"""Domain models for link records and proof fetches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from web3 import Web3

from storagelink.core.exceptions import ValidationError
from storagelink.core.hashing import keccak
from storagelink.core.types import ZERO_ADDRESS

StorageKey = Union[bytes, int, str]


def to_address(value: str | bytes | None) -> str | None:
    """
    Normalize an address to checksum form.

    The zero address and None both normalize to None ("unset").
    """
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 20:
            raise ValidationError(f"Address must be 20 bytes, got {len(value)}")
        value = "0x" + bytes(value).hex()
    if not Web3.is_address(value):
        raise ValidationError(f"Invalid address: {value}")
    address = Web3.to_checksum_address(value)
    if address == ZERO_ADDRESS:
        return None
    return address


def address_bytes(address: str) -> bytes:
    """Raw 20 bytes of a hex address."""
    return bytes.fromhex(address[2:])


class Link(BaseModel):
    """Where and how to fetch remote records for an authoritative node."""

    model_config = ConfigDict(frozen=True)

    chain_id: int = Field(..., ge=0, description="Remote chain id")
    target: str | None = Field(default=None, description="Remote registry address")
    verifier: str | None = Field(
        default=None, description="Verifier override; falls back to the chain default"
    )
    gateways: tuple[str, ...] = Field(
        default_factory=tuple, description="Gateway endpoints; empty means defaults"
    )

    @field_validator("target", "verifier", mode="before")
    @classmethod
    def _normalize_address(cls, value: Any) -> str | None:
        try:
            return to_address(value)
        except ValidationError as e:
            raise ValueError(e.message) from e

    @property
    def is_resolvable(self) -> bool:
        return self.target is not None


@dataclass(frozen=True)
class StoragePath:
    """
    Location of a value in remote contract storage.

    ``slot`` is the root slot of a state variable and ``keys`` are the mapping
    keys followed from it, outermost first. ``dynamic`` marks a
    length-prefixed bytes/string value rather than a single word.
    """

    slot: int
    keys: tuple[StorageKey, ...] = ()
    dynamic: bool = False

    def follow(self, key: StorageKey) -> StoragePath:
        return StoragePath(self.slot, self.keys + (key,), self.dynamic)

    def storage_slot(self) -> int:
        """Concrete slot number using Solidity mapping layout."""
        slot = self.slot
        for key in self.keys:
            slot = int.from_bytes(keccak(_key_bytes(key) + slot.to_bytes(32, "big")), "big")
        return slot

    def to_json(self) -> dict[str, Any]:
        return {
            "slot": hex(self.slot),
            "keys": [_key_json(key) for key in self.keys],
            "dynamic": self.dynamic,
            "storageSlot": "0x" + self.storage_slot().to_bytes(32, "big").hex(),
        }


def _key_bytes(key: StorageKey) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, int):
        return key.to_bytes(32, "big")
    return bytes(key).rjust(32, b"\x00")


def _key_json(key: StorageKey) -> str | int:
    if isinstance(key, (bytes, bytearray)):
        return "0x" + bytes(key).hex()
    return key


@dataclass(frozen=True)
class FetchRequest:
    """A single proof-fetch request: one storage read against one target."""

    target: str
    path: StoragePath


class FetchResult(BaseModel):
    """Values proven by a verifier, with the request's exit code."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    values: list[bytes] = Field(default_factory=list)
    exit_code: int = Field(default=0, alias="exitCode")

    @field_validator("values", mode="before")
    @classmethod
    def _decode_hex(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [
                bytes.fromhex(v[2:] if v.startswith("0x") else v) if isinstance(v, str) else v
                for v in value
            ]
        return value

    @property
    def first(self) -> bytes:
        """First returned value, or empty bytes if none."""
        return self.values[0] if self.values else b""
