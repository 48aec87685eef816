"""Store key builders for consistent key formatting."""


class StoreKeys:
    """Store key builders for consistent key formatting."""

    PREFIX = "storagelink"

    def __init__(self, prefix: str | None = None) -> None:
        self.prefix = prefix or self.PREFIX

    def link(self, node: bytes) -> str:
        """Key for the link record of a node."""
        return f"{self.prefix}:link:{node.hex()}"

    def verifier(self, chain_id: int) -> str:
        """Key for the default verifier of a chain."""
        return f"{self.prefix}:verifier:{chain_id}"
