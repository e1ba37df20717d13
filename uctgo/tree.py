"""The UCT minimax tree: nodes, coordinates and basic tree operations.

Coordinates follow the bordered board layout: a board of ``size`` includes
a one-point border on each side, so a 19x19 goban has ``size == 21`` and
the playable points have ``1 <= x, y <= size - 2``.  Tree sizes are counted
in nodes.
"""

from __future__ import annotations

import bisect
import itertools
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, Optional

from uctgo.stats import MoveStats

PASS = -1
RESIGN = -2

# Common Fate Graph distance is kept up to this value (plus one for "far").
TREE_NODE_D_MAX = 3
# Hint bit: do not descend to this node, its move is invalid.
TREE_HINT_INVALID = 1

_COLUMNS = "ABCDEFGHJKLMNOPQRSTUVWXYZ"
_hashes = itertools.count()


class Stone(IntEnum):
    NONE = 0
    BLACK = 1
    WHITE = 2
    OFFBOARD = 3

    def other(self) -> Stone:
        """The opposing colour; NONE and OFFBOARD map to themselves."""
        if self is Stone.BLACK:
            return Stone.WHITE
        if self is Stone.WHITE:
            return Stone.BLACK
        return self


class Symmetry(IntEnum):
    FULL = 0
    DIAG_UP = 1
    DIAG_DOWN = 2
    HORIZ = 3
    VERT = 4
    NONE = 5


def is_pass(coord: int) -> bool:
    return coord == PASS


def is_resign(coord: int) -> bool:
    return coord == RESIGN


def coord_xy(size: int, x: int, y: int) -> int:
    """Coordinate of the point at column ``x`` and row ``y``."""
    return x + y * size


def coord_x(coord: int, size: int) -> int:
    return coord % size


def coord_y(coord: int, size: int) -> int:
    return coord // size


def coord2str(coord: int, size: int) -> str:
    """Human readable name of a coordinate, e.g. ``D4``, ``pass``."""
    if is_pass(coord):
        return "pass"
    if is_resign(coord):
        return "resign"
    x, y = coord_x(coord, size), coord_y(coord, size)
    if not 1 <= x <= len(_COLUMNS) or y < 1:
        raise ValueError(f"coordinate {coord} is off the board")
    return f"{_COLUMNS[x - 1]}{y}"


@dataclass
class BoardSymmetry:
    """The part of the board (playground) that moves are restricted to."""

    x1: int
    y1: int
    x2: int
    y2: int
    d: int = 0
    type: Symmetry = Symmetry.NONE


@dataclass(eq=False)
class TreeNode:
    """A node of the tree; children are kept ordered by coordinate."""

    coord: int
    depth: int = 0
    hash: int = 0
    parent: Optional[TreeNode] = None
    children: list[TreeNode] = field(default_factory=list)
    d: int = 0
    hints: int = 0
    descents: int = 0
    is_expanded: bool = False
    u: MoveStats = field(default_factory=MoveStats)
    prior: MoveStats = field(default_factory=MoveStats)
    amaf: MoveStats = field(default_factory=MoveStats)
    pu: MoveStats = field(default_factory=MoveStats)
    winner_owner: MoveStats = field(default_factory=MoveStats)
    black_owner: MoveStats = field(default_factory=MoveStats)

    def is_leaf(self) -> bool:
        return not self.children

    def iter_children(self) -> Iterator[TreeNode]:
        return iter(self.children)

    def criticality(self) -> float:
        """Covariance of owning the node's point and winning the game."""
        bo = self.black_owner.value
        bw = self.u.value
        return self.winner_owner.value - (2 * bo * bw - bo - bw + 1)


class Tree:
    """A UCT tree with its root, local trees and bookkeeping."""

    def __init__(
        self,
        board_size: int,
        color: Stone,
        max_tree_size: int = 0,
        max_pruned_size: int = 0,
        pruning_threshold: int = 0,
        ltree_aging: float = 1.0,
        symmetry: Optional[BoardSymmetry] = None,
    ) -> None:
        self.board_size = board_size
        self.max_tree_size = max_tree_size
        self.max_pruned_size = max_pruned_size
        self.pruning_threshold = pruning_threshold
        self.nodes_size = 0
        self.max_depth = 0
        self.use_extra_komi = False
        self.untrustworthy_tree = False
        self.extra_komi = 0.0
        self.avg_score = MoveStats()

        root = self.new_node(PASS, 0)
        if root is None:
            raise ValueError("max_tree_size leaves no room for the root node")
        self.root: TreeNode = root
        self.root_symmetry = symmetry or BoardSymmetry(1, 1, board_size - 2, board_size - 2)
        # To search black moves, the root is white.
        self.root_color = Stone(color).other()

        self.ltree_black = self._make_node(PASS, 0, fast=False)
        self.ltree_white = self._make_node(PASS, 0, fast=False)
        self.ltree_aging = ltree_aging

    @property
    def fast_alloc(self) -> bool:
        """True when the tree has a fixed node budget."""
        return self.max_tree_size > 0

    def _make_node(self, coord: int, depth: int, fast: bool) -> Optional[TreeNode]:
        if fast and self.nodes_size + 1 > self.max_tree_size:
            return None
        self.nodes_size += 1
        if depth > self.max_depth:
            self.max_depth = depth
        return TreeNode(coord=coord, depth=depth, hash=next(_hashes))

    def new_node(self, coord: int, depth: int) -> Optional[TreeNode]:
        """Allocate a node; None when the node budget is exhausted."""
        return self._make_node(coord, depth, fast=self.fast_alloc)

    def node_parity(self, node: TreeNode) -> int:
        return -1 if (node.depth ^ self.root.depth) & 1 else 1

    def black_parity(self, parity: int) -> int:
        """Black's parity given a parity within the tree."""
        return parity if self.root_color == Stone.WHITE else -parity

    def node_value(self, parity: int, value: float) -> float:
        """A 0..1 value to maximize for the side given by ``parity``."""
        return value if self.black_parity(parity) > 0 else 1 - value

    def get_node(self, parent: TreeNode, coord: int, create: bool) -> Optional[TreeNode]:
        """Find the child of ``parent`` at ``coord``, creating it if asked."""
        children = parent.children
        i = bisect.bisect_left(children, coord, key=lambda n: n.coord)
        if i < len(children) and children[i].coord == coord:
            return children[i]
        if not create:
            return None
        node = self._make_node(coord, parent.depth + 1, fast=False)
        node.parent = parent
        children.insert(i, node)
        return node

    def lnode_for_node(
        self, ni: TreeNode, lni: TreeNode, tenuki_d: int
    ) -> Optional[TreeNode]:
        """Local tree node matching ``ni``, given the local iterator ``lni``."""
        if is_pass(ni.coord):
            # Local trees are never used for passes.
            return None
        if lni.coord == ni.coord:
            return lni
        if ni.d >= tenuki_d:
            if lni.parent is None or not lni.parent.children:
                raise ValueError("local node has no parent with children")
            first = lni.parent.children[0]
            return first if is_pass(first.coord) else None
        return None