"""Huffman trees: construction, code assignment and debug serialisation."""

from __future__ import annotations

import struct
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from bmpsqueeze.minheap import MinHeap

EMPTY_DIFFERENCE = 999
"""Placeholder value carried by internal (non-leaf) nodes."""

_NULL_MARKER = b"\xff"


@dataclass
class HuffmanNode:
    """A node of a Huffman tree.

    Leaves carry a symbol in ``value``; internal nodes carry
    ``EMPTY_DIFFERENCE`` and the summed frequency of their subtree.
    """

    value: int
    frequency: int
    left: Optional["HuffmanNode"] = None
    right: Optional["HuffmanNode"] = None

    def is_leaf(self) -> bool:
        """Return True when the node has no children."""
        return self.left is None and self.right is None


def merge_trees(a: HuffmanNode, b: HuffmanNode) -> HuffmanNode:
    """Join two trees under a new internal node with ``a`` on the left."""
    if a is None or b is None:
        raise ValueError("cannot merge a missing tree")
    return HuffmanNode(EMPTY_DIFFERENCE, a.frequency + b.frequency, a, b)


def build_tree(items: Iterable[tuple[int, int]]) -> Optional[HuffmanNode]:
    """Build a Huffman tree from ``(value, frequency)`` pairs.

    Pairs are pushed onto the heap in the order given. Returns None when
    there are no items at all.
    """
    heap = MinHeap()
    for value, frequency in items:
        heap.push(HuffmanNode(value, frequency))

    if not len(heap):
        return None

    while len(heap) > 1:
        smallest = heap.pop()
        second = heap.pop()
        heap.push(merge_trees(smallest, second))

    return heap.pop()


def generate_codes(
    tree: Optional[HuffmanNode], items: Iterable[tuple[int, int]]
) -> dict[int, str]:
    """Map each leaf symbol of ``tree`` to its bit string.

    ``items`` are the ``(value, frequency)`` pairs the tree was built from;
    a leaf whose value is not among them raises ValueError. Left edges are
    '0' and right edges '1'; a tree made of a single leaf gets the empty code.
    """
    known = {value for value, _ in items}
    codes: dict[int, str] = {}
    if tree is None:
        return codes

    stack: list[tuple[HuffmanNode, str]] = [(tree, "")]
    while stack:
        node, prefix = stack.pop()
        if node.is_leaf():
            if node.value not in known:
                raise ValueError(f"symbol code not found for value {node.value}")
            codes[node.value] = prefix
            continue
        if node.right is not None:
            stack.append((node.right, prefix + "1"))
        if node.left is not None:
            stack.append((node.left, prefix + "0"))
    return codes


def _describe(node: Optional[HuffmanNode]) -> str:
    if node is None:
        return "NULL"
    return f"({node.value}, {node.frequency})"


def format_tree(tree: Optional[HuffmanNode]) -> str:
    """Render the tree in pre-order, one line per node with its children."""
    lines: list[str] = []
    stack: list[Optional[HuffmanNode]] = [tree]
    while stack:
        node = stack.pop()
        if node is None:
            continue
        lines.append(
            f"{_describe(node)} -> {_describe(node.left)}, {_describe(node.right)}\n"
        )
        stack.append(node.right)
        stack.append(node.left)
    return "".join(lines)


def serialize_tree(tree: Optional[HuffmanNode]) -> bytes:
    """Serialise the tree in pre-order as marker bytes.

    Each node writes 0x01 (leaf, followed by its value as a little-endian
    32-bit integer) or 0x00 (internal), then both children; a missing
    child is written as 0xFF.
    """
    if tree is None:
        raise ValueError("cannot serialise a missing tree")

    out = bytearray()
    stack: list[Optional[HuffmanNode]] = [tree]
    while stack:
        node = stack.pop()
        if node is None:
            out += _NULL_MARKER
            continue
        if node.is_leaf():
            out += b"\x01" + struct.pack("<i", node.value)
        else:
            out += b"\x00"
        stack.append(node.right)
        stack.append(node.left)
    return bytes(out)