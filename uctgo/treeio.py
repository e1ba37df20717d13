"""Saving, loading and dumping UCT trees (the opening tree book)."""

from __future__ import annotations

import logging
import struct
import sys
from typing import BinaryIO, Optional, TextIO

from uctgo.stats import MoveStats
from uctgo.tree import Tree, TreeNode, coord2str

log = logging.getLogger(__name__)

# Playout counts are capped on load to keep values in a sane scale.
MAX_PLAYOUTS = 10_000_000

_STATS = ("u", "prior", "amaf", "pu", "winner_owner", "black_owner")
_RECORD = struct.Struct("<HBBbh?" + "id" * len(_STATS))


def tbook_name(size: int, komi: float, handicap: int) -> str:
    """File name of the tree book for a bordered board ``size``."""
    if handicap > 0:
        return f"ucttbook-{size - 2}-{komi:02.1f}-h{handicap}.pachitree"
    return f"ucttbook-{size - 2}-{komi:02.1f}.pachitree"


def _write_node(f: BinaryIO, node: TreeNode, threshold: int) -> None:
    save_children = node.u.playouts >= threshold
    stats = []
    for name in _STATS:
        s = getattr(node, name)
        stats += [s.playouts, s.value]
    f.write(b"\x01")
    f.write(_RECORD.pack(
        node.depth, node.d, node.hints, node.descents, node.coord,
        node.is_expanded if save_children else False, *stats,
    ))
    if save_children:
        for child in node.children:
            _write_node(f, child, threshold)
    f.write(b"\x00")


def save_tree(tree: Tree, path, threshold: int) -> None:
    """Write the tree; children of nodes below ``threshold`` playouts are left out."""
    with open(path, "wb") as f:
        _write_node(f, tree.root, threshold)
        f.write(b"\x00")


def _read_flag(f: BinaryIO) -> bool:
    byte = f.read(1)
    if not byte:
        raise ValueError("truncated tree book")
    return byte != b"\x00"


def _read_node(f: BinaryIO, tree: Tree, node: TreeNode) -> int:
    data = f.read(_RECORD.size)
    if len(data) != _RECORD.size:
        raise ValueError("truncated tree book")
    depth, d, hints, descents, coord, expanded, *stats = _RECORD.unpack(data)
    node.depth, node.d, node.hints, node.descents = depth, d, hints, descents
    node.coord, node.is_expanded = coord, expanded
    for i, name in enumerate(_STATS):
        setattr(node, name, MoveStats(stats[2 * i], stats[2 * i + 1]))
    node.u.playouts = min(node.u.playouts, MAX_PLAYOUTS)
    node.amaf.playouts = min(node.amaf.playouts, MAX_PLAYOUTS)
    node.pu = MoveStats(node.u.playouts, node.u.value)

    count = 1
    while _read_flag(f):
        child = TreeNode(coord=0, parent=node)
        tree.nodes_size += 1
        node.children.append(child)
        count += _read_node(f, tree, child)
    return count


def load_tree(tree: Tree, path) -> int:
    """Load a saved tree into ``tree``'s root; returns the number of nodes read.

    A missing file loads nothing.
    """
    try:
        f = open(path, "rb")
    except FileNotFoundError:
        return 0
    with f:
        log.info("Loading opening tbook %s...", path)
        count = _read_node(f, tree, tree.root) if _read_flag(f) else 0
    log.info("Loaded %d nodes.", count)
    return count


def _dump_node(tree: Tree, node: TreeNode, parity: int, level: int, thres: int, out: TextIO) -> None:
    out.write(
        " " * level
        + f"[{coord2str(node.coord, tree.board_size)}] "
        f"{tree.node_value(parity, node.u.value):.3f}/{node.u.playouts} "
        f"[prior {tree.node_value(parity, node.prior.value):.3f}/{node.prior.playouts} "
        f"amaf {tree.node_value(parity, node.amaf.value):.3f}/{node.amaf.playouts} "
        f"crit {node.criticality():.3f} vloss {node.descents}] "
        f"h={node.hints:x} c#={len(node.children)} <{node.hash:x}>\n"
    )
    shown = [c for c in node.children if c.u.playouts > thres]
    for child in sorted(shown, key=lambda c: -c.u.playouts):
        _dump_node(tree, child, parity, level + 1, thres, out)


def dump_tree(tree: Tree, threshold: float, stream: Optional[TextIO] = None) -> None:
    """Print the tree, children sorted by playouts.

    A positive ``threshold`` is a fraction of the root playouts; nodes
    must have more playouts than that to be shown.
    """
    out = stream if stream is not None else sys.stderr
    thres = int(tree.root.u.playouts * threshold) if threshold > 0 else int(threshold)
    out.write(
        f"(UCT tree; root {tree.root_color.name.lower()}; "
        f"extra komi {tree.extra_komi:f}; max depth {tree.max_depth - tree.root.depth})\n"
    )
    _dump_node(tree, tree.root, 1, 0, thres, out)