"""Registry of default verifiers keyed by chain id."""

from __future__ import annotations

from storagelink.core.models import to_address
from storagelink.registry.keys import StoreKeys
from storagelink.registry.store import KeyValueStore


class VerifierRegistry:
    """Maps a chain id to the verifier used when a link has no override."""

    def __init__(self, store: KeyValueStore, keys: StoreKeys | None = None) -> None:
        self._store = store
        self._keys = keys or StoreKeys()

    async def get(self, chain_id: int) -> str | None:
        return await self._store.get(self._keys.verifier(chain_id))

    async def put(self, chain_id: int, verifier: str | None) -> None:
        """Set the default verifier; None or the zero address clears it."""
        address = to_address(verifier)
        key = self._keys.verifier(chain_id)
        if address is None:
            await self._store.delete(key)
        else:
            await self._store.set(key, address)
