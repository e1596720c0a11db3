"""Huffman coding of byte strings with a compact in-stream tree description.

The compressed stream starts with the code tree written depth first: a
``0`` bit for an inner node, a ``1`` bit followed by the eight bits of the
symbol for a leaf.  The codes of the input bytes follow, most significant
bit first.  The final byte is padded with zero bits.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

MAX_TREE_NODES = 511

_DecodeTree = Union[int, tuple["_DecodeTree", "_DecodeTree"]]


@dataclass(eq=False)
class _Node:
    count: int
    symbol: int = -1
    child_a: _Node | None = None
    child_b: _Node | None = None


def _build_tree(histogram: list[int]) -> _Node:
    """Join the two lightest nodes until only the root is left."""
    nodes = [
        _Node(count=count, symbol=symbol)
        for symbol, count in enumerate(histogram)
        if count > 0
    ]
    root: _Node | None = None
    for _ in range(len(nodes) - 1):
        lightest: _Node | None = None
        second: _Node | None = None
        for node in nodes:
            if node.count <= 0:
                continue
            if lightest is None or node.count <= lightest.count:
                second, lightest = lightest, node
            elif second is None or node.count <= second.count:
                second = node
        assert lightest is not None and second is not None
        root = _Node(
            count=lightest.count + second.count,
            child_a=lightest,
            child_b=second,
        )
        lightest.count = 0
        second.count = 0
        nodes.append(root)
    return root if root is not None else nodes[0]


def _store_tree(
    node: _Node, codes: dict[int, str], description: list[str], code: str
) -> None:
    if node.symbol >= 0:
        description.append("1" + format(node.symbol, "08b"))
        codes[node.symbol] = code
        return
    description.append("0")
    assert node.child_a is not None and node.child_b is not None
    _store_tree(node.child_a, codes, description, code + "0")
    _store_tree(node.child_b, codes, description, code + "1")


def compress(data: bytes | bytearray | memoryview) -> bytes:
    """Return ``data`` Huffman coded; empty input gives empty output."""
    data = bytes(data)
    if not data:
        return b""

    histogram = [0] * 256
    for byte in data:
        histogram[byte] += 1

    root = _build_tree(histogram)
    codes: dict[int, str] = {}
    description: list[str] = []
    # A lone symbol still needs one bit per occurrence.
    _store_tree(root, codes, description, "" if root.symbol < 0 else "0")

    bits = "".join(description) + "".join(codes[byte] for byte in data)
    padding = -len(bits) % 8
    bits += "0" * padding
    return int(bits, 2).to_bytes(len(bits) // 8, "big")


class _BitReader:
    def __init__(self, data: bytes) -> None:
        self._bits = format(int.from_bytes(data, "big"), f"0{8 * len(data)}b")
        self.position = 0

    @property
    def at_end(self) -> bool:
        """True once the reader has moved onto or past the last byte boundary."""
        return self.position // 8 >= len(self._bits) // 8

    def has(self, count: int) -> bool:
        return self.position + count <= len(self._bits)

    def read(self, count: int) -> int:
        if not self.has(count):
            raise EOFError
        value = int(self._bits[self.position : self.position + count], 2)
        self.position += count
        return value


def _recover_tree(reader: _BitReader) -> _DecodeTree:
    node_count = 0

    def recover() -> _DecodeTree:
        nonlocal node_count
        node_count += 1
        if node_count > MAX_TREE_NODES:
            raise ValueError("Huffman tree description has too many nodes")
        if reader.read(1):
            return reader.read(8)
        child_a = recover()
        child_b = recover()
        return (child_a, child_b)

    try:
        return recover()
    except EOFError:
        raise ValueError("compressed data ends inside the tree description") from None


def uncompress(data: bytes | bytearray | memoryview, size: int) -> bytes:
    """Decode at most ``size`` bytes from Huffman coded ``data``.

    Decoding stops early when the compressed input is used up.
    """
    if size < 0:
        raise ValueError(f"size must not be negative, got {size}")
    data = bytes(data)
    if not data:
        return b""

    reader = _BitReader(data)
    root = _recover_tree(reader)

    out = bytearray()
    while len(out) < size:
        if reader.at_end:
            break
        node = root
        try:
            while isinstance(node, tuple):
                node = node[1] if reader.read(1) else node[0]
        except EOFError:
            break
        out.append(node)
    return bytes(out)