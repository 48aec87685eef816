"""Name hashing and DNS wire-format helpers.

Names travel as DNS wire-format bytes: each label is a single length byte
followed by that many bytes, and the sequence ends with a zero length byte.

    b"\\x02my\\x05chonk\\x00"  ->  "my.chonk"

Node identifiers follow ENS namehash: the empty name hashes to 32 zero bytes
and each label is folded in from the right as
``keccak256(parent_node + keccak256(label))``.
"""

from __future__ import annotations

from web3 import Web3

from storagelink.core.exceptions import MalformedNameError, ValidationError

EMPTY_NODE = bytes(32)

MAX_LABEL_LENGTH = 255


def keccak(data: bytes) -> bytes:
    """Keccak-256 digest of raw bytes."""
    return bytes(Web3.keccak(data))


def label_hash(label: bytes | str) -> bytes:
    """Hash of a single label (not recursive)."""
    if isinstance(label, str):
        label = label.encode("utf-8")
    return keccak(label)


def split_labels(name: bytes) -> list[tuple[int, bytes]]:
    """
    Parse a DNS-encoded name into ``(offset, label)`` pairs.

    The terminal zero-length label is included as the last pair so that
    every valid walk offset appears in the result.

    Raises:
        MalformedNameError: if a length byte runs past the buffer, the
            terminator is missing, or bytes follow the terminator.
    """
    if not name:
        raise MalformedNameError("Empty name encoding", offset=0)

    labels: list[tuple[int, bytes]] = []
    offset = 0
    end = len(name)
    while offset < end:
        length = name[offset]
        if length == 0:
            labels.append((offset, b""))
            if offset + 1 != end:
                raise MalformedNameError(
                    "Trailing bytes after terminal label",
                    offset=offset + 1,
                )
            return labels
        if offset + 1 + length > end:
            raise MalformedNameError(
                f"Label length {length} at offset {offset} exceeds name length {end}",
                offset=offset,
            )
        labels.append((offset, name[offset + 1 : offset + 1 + length]))
        offset += 1 + length

    raise MalformedNameError("Missing terminal label", offset=end)


def namehash_at(name: bytes, offset: int = 0) -> bytes:
    """
    Node identifier of the suffix of ``name`` starting at ``offset``.

    ``offset`` must fall on a label boundary; offset 0 is the full name and
    the offset of the terminator is the root.
    """
    for label_offset, node in suffix_nodes(name):
        if label_offset == offset:
            return node
    raise MalformedNameError(
        f"Offset {offset} is not a label boundary",
        offset=offset,
    )


def suffix_nodes(name: bytes) -> list[tuple[int, bytes]]:
    """
    ``(offset, node)`` for every suffix of ``name``, leaf first.

    The name is parsed once and the nodes are folded from the root, so the
    cost is linear in the number of labels.
    """
    labels = split_labels(name)
    nodes: list[tuple[int, bytes]] = []
    node = EMPTY_NODE
    for offset, label in reversed(labels):
        if label:
            node = keccak(node + label_hash(label))
        nodes.append((offset, node))
    nodes.reverse()
    return nodes


def namehash(name: str) -> bytes:
    """Namehash of a dotted name."""
    return namehash_at(dns_encode(name))


def dns_encode(name: str) -> bytes:
    """Encode a dotted name into DNS wire format."""
    name = name.strip(".")
    if not name:
        return b"\x00"

    encoded = bytearray()
    for label in name.split("."):
        raw = label.encode("utf-8")
        if not raw:
            raise ValidationError(f"Empty label in name: {name!r}")
        if len(raw) > MAX_LABEL_LENGTH:
            raise ValidationError(
                f"Label exceeds {MAX_LABEL_LENGTH} bytes",
                details={"label": label[:32]},
            )
        encoded.append(len(raw))
        encoded.extend(raw)
    encoded.append(0)
    return bytes(encoded)


def dns_decode(name: bytes) -> str:
    """Decode a DNS wire-format name into a dotted string."""
    return ".".join(
        label.decode("utf-8", errors="replace")
        for _, label in split_labels(name)
        if label
    )
