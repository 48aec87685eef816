"""Core enums and type definitions."""

from enum import StrEnum

# Coin type used for the chain's native address (SLIP-44 ETH).
COIN_TYPE_ETH = 60

# ENSIP-11 marker bit for EVM chain coin types.
EVM_COIN_TYPE_BIT = 0x80000000

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class ResolutionProfile(StrEnum):
    """Resolver functions understood by the resolver, keyed by 4-byte selector."""

    ADDR = "3b3b57de"  # addr(bytes32)
    ADDR_COIN = "f1cb7e06"  # addr(bytes32,uint256)
    TEXT = "59d1d43c"  # text(bytes32,string)
    CONTENTHASH = "bc1c58d1"  # contenthash(bytes32)

    @property
    def selector(self) -> bytes:
        return bytes.fromhex(self.value)

    @property
    def signature(self) -> str:
        return _SIGNATURES[self]

    @classmethod
    def from_selector(cls, selector: bytes) -> "ResolutionProfile | None":
        """Look up a profile by selector; unknown selectors give None."""
        try:
            return cls(selector.hex())
        except ValueError:
            return None


_SIGNATURES = {
    ResolutionProfile.ADDR: "addr(bytes32)",
    ResolutionProfile.ADDR_COIN: "addr(bytes32,uint256)",
    ResolutionProfile.TEXT: "text(bytes32,string)",
    ResolutionProfile.CONTENTHASH: "contenthash(bytes32)",
}


class DecodeMode(StrEnum):
    """How a proof result is turned into the caller's output."""

    ADDRESS = "address"  # last 20 bytes as an address
    SUPPLY = "supply"  # uint formatted as "<N> subdomains"
    PASSTHROUGH = "passthrough"  # first value as-is


class AnswerSource(StrEnum):
    """Where a short-circuit answer comes from."""

    EMPTY = "empty"
    VERIFIER = "verifier"
    TARGET = "target"
    PLACEHOLDER = "placeholder"


def evm_coin_type(chain_id: int) -> int:
    """Coin type for an EVM chain id."""
    return EVM_COIN_TYPE_BIT | chain_id
