"""
Module F1 - Forest Builder
Deterministic reconstruction of the accumulator forest from a leaf count.

Owner: Visualization Engineer
Module ID: F1

This module provides:
- ForestNode / ForestEdge / Forest: immutable model of one build
- build_forest: leaf count -> (nodes, edges)
- fingerprint: short, non-cryptographic display label

Forest Shape Rules (Hard Contracts):
1. Leaves are created left to right as leaf-0 ... leaf-{n-1} at level 0.
2. Adjacent active nodes of a level are paired left to right; every pair
   gets a synthetic parent node-{k}, k being the creation order in the build.
3. An odd trailing node is promoted unchanged in identity. It never gets a
   single-child parent and never pairs again: it is the top of a finished
   perfect subtree and keeps rising with the rows above it.
4. Building stops when at most one active node is left; every node of the
   final row is a root. Root count == popcount(leaf_count).

Determinism Notes:
- Shape (levels, linkage, roots) depends on leaf_count only
- Fingerprints additionally depend on the salt; with a fixed salt the whole
  build is reproducible
- No module-level or global state is read while building
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Iterator, Optional

from core.forest.layout import DEFAULT_LAYOUT, LayoutConfig, calculate_position


logger = logging.getLogger(__name__)


class ForestInvariantError(RuntimeError):
    """Raised when a build violates the forest shape contract (a programming defect)."""


@dataclass(frozen=True)
class ForestNode:
    """
    One position of the forest, leaf or internal.

    Attributes:
        id: Identifier unique within one build (leaf-{i} / node-{k})
        level: 0 for the leaf row, increasing toward the roots
        x: Horizontal layout coordinate
        y: Vertical layout coordinate
        fingerprint: Cosmetic display label
        children: (left, right) child ids, None on leaves
        parent: Parent id, None on roots
        is_root: Top of one tree of the forest
        is_leaf: Node has no children
    """
    id: str
    level: int
    x: float
    y: float
    fingerprint: str
    children: Optional[tuple[str, str]] = None
    parent: Optional[str] = None
    is_root: bool = False
    is_leaf: bool = False

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y


@dataclass(frozen=True)
class ForestEdge:
    """Parent -> child connection with both endpoints resolved for drawing."""
    from_id: str
    to_id: str
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class Forest:
    """
    Result of one build: the complete node and edge sets for a leaf count.

    Nodes are ordered leaves first, then internal nodes in creation order.
    """
    leaf_count: int
    nodes: tuple[ForestNode, ...] = ()
    edges: tuple[ForestEdge, ...] = ()
    _index: dict[str, ForestNode] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", {node.id: node for node in self.nodes})

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def __iter__(self) -> Iterator[ForestNode]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def get(self, node_id: str) -> Optional[ForestNode]:
        return self._index.get(node_id)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    @property
    def roots(self) -> list[ForestNode]:
        return [n for n in self.nodes if n.is_root]

    @property
    def leaves(self) -> list[ForestNode]:
        return [n for n in self.nodes if n.is_leaf]

    @property
    def internal_nodes(self) -> list[ForestNode]:
        return [n for n in self.nodes if not n.is_leaf]


EMPTY_FOREST = Forest(leaf_count=0)


def fingerprint(data: str) -> str:
    """
    Compute an 8 character display label for a string.

    Classic 32-bit string hash (h = h * 31 + code point, signed wrap),
    absolute value rendered as zero-padded lower-case hex. Not cryptographic.

    Example:
        >>> fingerprint("")
        '00000000'
        >>> fingerprint("a")
        '00000061'
    """
    h = 0
    for char in data:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h & 0x80000000:
        h -= 0x100000000
    return format(abs(h), "08x")[:8]


@dataclass
class _DraftNode:
    """Mutable node used while a build is in progress."""
    id: str
    level: int
    x: float
    y: float
    fingerprint: str
    children: Optional[tuple[str, str]] = None
    parent: Optional[str] = None
    is_root: bool = False

    def freeze(self) -> ForestNode:
        return ForestNode(
            id=self.id,
            level=self.level,
            x=self.x,
            y=self.y,
            fingerprint=self.fingerprint,
            children=self.children,
            parent=self.parent,
            is_root=self.is_root,
            is_leaf=self.children is None,
        )


def _place_row(row: list[_DraftNode], level: int, layout: LayoutConfig) -> None:
    for index, node in enumerate(row):
        node.level = level
        node.x, node.y = calculate_position(level, index, len(row), layout)


def build_forest(
    leaf_count: int,
    *,
    salt: object = None,
    layout: Optional[LayoutConfig] = None,
) -> Forest:
    """
    Build the forest for a leaf count.

    Algorithm:
    1. If leaf_count == 0: return the empty forest
    2. Create the leaf row
    3. While more than one active node remains:
       - Pair active nodes left to right, one parent per pair
       - Promote an odd trailing active node unchanged and freeze it
       - Lay out the new row: parents, then the promoted node, then nodes
         frozen on earlier levels
    4. Mark every node of the final row as a root

    Example: 5 leaves
        level 0: [l0, l1, l2, l3, l4]
        level 1: [n0(l0,l1), n1(l2,l3), l4]      l4 frozen
        level 2: [n2(n0,n1), l4]                 roots: n2, l4

    Args:
        leaf_count: Number of leaves (non-negative)
        salt: Uniqueness salt mixed into leaf fingerprints; defaults to the
              wall clock in milliseconds
        layout: Canvas geometry (defaults to DEFAULT_LAYOUT)

    Returns:
        Immutable Forest

    Raises:
        ValueError: If leaf_count is negative or not an integer
        ForestInvariantError: If the result breaks the root-count contract
    """
    if isinstance(leaf_count, bool) or not isinstance(leaf_count, int):
        raise ValueError(f"Leaf count must be an integer, got {leaf_count!r}")
    if leaf_count < 0:
        raise ValueError(f"Leaf count must be non-negative, got {leaf_count}")
    if leaf_count == 0:
        return EMPTY_FOREST

    layout = layout or DEFAULT_LAYOUT
    if salt is None:
        salt = time.time_ns() // 1_000_000

    drafts: list[_DraftNode] = []
    links: list[tuple[_DraftNode, _DraftNode]] = []

    leaves = [
        _DraftNode(id=f"leaf-{i}", level=0, x=0.0, y=0.0,
                   fingerprint=fingerprint(f"leaf-{i}-{salt}"))
        for i in range(leaf_count)
    ]
    _place_row(leaves, 0, layout)
    drafts.extend(leaves)

    active: list[_DraftNode] = leaves
    frozen: list[_DraftNode] = []
    row: list[_DraftNode] = leaves
    level = 0
    node_counter = 0

    while len(active) > 1:
        level += 1
        parents: list[_DraftNode] = []

        for i in range(0, len(active) - 1, 2):
            left, right = active[i], active[i + 1]
            parent = _DraftNode(
                id=f"node-{node_counter}",
                level=level,
                x=0.0,
                y=0.0,
                fingerprint=fingerprint(left.fingerprint + right.fingerprint),
                children=(left.id, right.id),
            )
            node_counter += 1
            left.parent = parent.id
            right.parent = parent.id
            links.append((parent, left))
            links.append((parent, right))
            parents.append(parent)
            drafts.append(parent)

        # Odd node out keeps its identity and tops a finished subtree
        if len(active) % 2 == 1:
            frozen.insert(0, active[-1])

        row = parents + frozen
        _place_row(row, level, layout)
        active = parents

    for node in row:
        node.is_root = True

    nodes = tuple(d.freeze() for d in drafts)
    edges = tuple(
        ForestEdge(
            from_id=parent.id,
            to_id=child.id,
            x1=parent.x,
            y1=parent.y,
            x2=child.x,
            y2=child.y,
        )
        for parent, child in links
    )

    if len(row) != bin(leaf_count).count("1"):
        raise ForestInvariantError(
            f"Built {len(row)} roots for {leaf_count} leaves, "
            f"expected {bin(leaf_count).count('1')}"
        )

    logger.debug(
        f"Built forest: leaves={leaf_count} nodes={len(nodes)} "
        f"edges={len(edges)} roots={len(row)} levels={level + 1}"
    )
    return Forest(leaf_count=leaf_count, nodes=nodes, edges=edges)


__all__ = [
    "ForestInvariantError",
    "ForestNode",
    "ForestEdge",
    "Forest",
    "EMPTY_FOREST",
    "fingerprint",
    "build_forest",
]
