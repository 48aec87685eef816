"""Locate the authoritative ancestor of a DNS-encoded name."""

from __future__ import annotations

import logging

from storagelink.core.exceptions import MalformedNameError, UnreachableError, ValidationError
from storagelink.core.hashing import label_hash, split_labels, suffix_nodes
from storagelink.core.models import to_address
from storagelink.registry.ownership import OwnershipOracle

logger = logging.getLogger(__name__)


class NameWalker:
    """
    Walks a name from the leaf towards the root looking for the first node
    whose configured resolver is ``resolver_address``.
    """

    def __init__(self, oracle: OwnershipOracle, resolver_address: str) -> None:
        address = to_address(resolver_address)
        if address is None:
            raise ValidationError("Resolver address must be set")
        self._oracle = oracle
        self._resolver_address = address

    @property
    def resolver_address(self) -> str:
        return self._resolver_address

    async def find_owning_node(self, name: bytes) -> tuple[bytes, int]:
        """
        Find the authoritative node for ``name``.

        Returns:
            ``(node, offset)`` where ``offset`` is the byte offset of the
            authoritative suffix within ``name``.

        Raises:
            MalformedNameError: if the encoding is inconsistent.
            UnreachableError: if no ancestor, including the root, names this
                resolver.
        """
        # Parses the whole encoding up front, so a malformed name never
        # reaches the oracle.
        for offset, node in suffix_nodes(name):
            resolver = await self._oracle.configured_resolver(node)
            if resolver is not None and resolver == self._resolver_address:
                logger.debug(f"Authoritative node {node.hex()} at offset {offset}")
                return node, offset

        raise UnreachableError(
            "No ancestor of name is configured with this resolver",
            details={"name": name.hex()},
        )


def subdomain_label_hash(name: bytes, offset: int) -> bytes | None:
    """
    Hash of the label directly attached to the authoritative node.

    Returns None when ``offset`` is 0, i.e. the query targets the
    authoritative node itself. Labels more than one level below the
    authoritative node are not distinguished.

    Raises:
        MalformedNameError: if the encoding is inconsistent or ``offset``
            does not land on a label boundary.
    """
    if offset == 0:
        return None

    labels = split_labels(name)
    for index in range(1, len(labels)):
        if labels[index][0] == offset:
            return label_hash(labels[index - 1][1])

    raise MalformedNameError(
        f"Offset {offset} does not match a label boundary",
        offset=offset,
    )
