"""Registry of link records keyed by authoritative node."""

from __future__ import annotations

from storagelink.core.exceptions import ValidationError
from storagelink.core.models import Link
from storagelink.registry.keys import StoreKeys
from storagelink.registry.store import KeyValueStore


class LinkRegistry:
    """Maps an authoritative node to its ``Link`` record."""

    def __init__(self, store: KeyValueStore, keys: StoreKeys | None = None) -> None:
        self._store = store
        self._keys = keys or StoreKeys()

    async def get(self, node: bytes) -> Link | None:
        """Get the link for a node, or None if none was set."""
        _check_node(node)
        raw = await self._store.get(self._keys.link(node))
        if raw is None:
            return None
        return Link.model_validate_json(raw)

    async def put(self, node: bytes, link: Link) -> None:
        """Replace the link for a node."""
        _check_node(node)
        await self._store.set(self._keys.link(node), link.model_dump_json())


def _check_node(node: bytes) -> None:
    if len(node) != 32:
        raise ValidationError(f"Node must be 32 bytes, got {len(node)}")
