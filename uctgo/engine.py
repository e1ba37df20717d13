"""Engine-level helpers of the UCT player: banner, result and chat reports, komi."""

from __future__ import annotations

import math
from typing import Optional

from uctgo.tree import Stone, Tree, coord2str

BANNER = (
    "If you believe you have won but I am still playing, "
    "please help me understand by capturing all dead stones. "
    "Anyone can send me 'winrate' in private chat to get my assessment of the position."
)


def engine_comment(banner: Optional[str] = None) -> str:
    """The engine comment: the standard banner followed by the user's one."""
    return f"{BANNER} {banner or ''}"


def format_result(tree: Optional[Tree]) -> Optional[str]:
    """Report the root of the tree: colour, move, playouts, win rate and extra komi.

    Returns None when there is no tree.
    """
    if tree is None:
        return None
    root = tree.root
    extra_komi = tree.extra_komi if tree.use_extra_komi else 0.0
    return (
        f"{tree.root_color.name.lower()} {coord2str(root.coord, tree.board_size)} "
        f"{root.u.playouts} {tree.node_value(-1, root.u.value):.2f} {extra_komi:.1f}"
    )


def japanese_komi(komi: float, board_size: int, color: Stone) -> float:
    """Komi adjusted pessimistically for territory scoring.

    With an even integer part of komi on an odd board (``board_size`` is
    the bordered size) area and territory scoring may disagree by a point,
    so the komi is moved one point against ``color``.
    """
    if (math.floor(komi) + board_size) & 1:
        return komi + (1.0 if Stone(color) == Stone.BLACK else -1.0)
    return komi


def chat_winrate(tree: Tree) -> tuple[float, float]:
    """Win rate of the side that played the root move, and the extra komi in use.

    Extra komi of less than a whole point is reported as zero.
    """
    winrate = tree.node_value(-1, tree.root.u.value)
    extra = tree.extra_komi
    extra_komi = extra if tree.use_extra_komi and abs(int(extra)) >= 0.5 else 0.0
    return winrate, extra_komi


def check_alternating(tree: Tree, color: Stone) -> Stone:
    """Check that ``color`` is the side to move in ``tree``; returns it.

    Raises ValueError on non-alternating play.
    """
    color = Stone(color)
    if color != tree.root_color.other():
        raise ValueError(
            f"Non-alternating play detected {int(color)} {int(tree.root_color)}"
        )
    return color