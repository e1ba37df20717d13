import pytest

from uctgo.engine import (
    BANNER,
    chat_winrate,
    check_alternating,
    engine_comment,
    format_result,
    japanese_komi,
)
from uctgo.tree import Stone, Tree


@pytest.fixture
def tree():
    return Tree(21, Stone.BLACK)


def test_engine_comment_without_banner():
    assert engine_comment(None) == BANNER + " "


def test_engine_comment_with_banner():
    comment = engine_comment("have fun")
    assert comment.startswith(BANNER)
    assert comment.endswith(" have fun")


def test_format_result_none_without_tree():
    assert format_result(None) is None


def test_format_result_fresh_tree(tree):
    assert format_result(tree) == "white pass 0 1.00 0.0"


def test_format_result_fields(tree):
    tree.root.u.playouts = 1234
    tree.root.u.value = 0.25
    tree.use_extra_komi = True
    tree.extra_komi = 3.0
    color, move, playouts, winrate, komi = format_result(tree).split()
    assert color == tree.root_color.name.lower()
    assert move == "pass"
    assert int(playouts) == 1234
    assert float(winrate) == pytest.approx(tree.node_value(-1, 0.25), abs=0.005)
    assert float(komi) == pytest.approx(3.0)


def test_format_result_ignores_unused_extra_komi(tree):
    tree.extra_komi = 5.0
    assert format_result(tree).split()[-1] == "0.0"


def test_japanese_komi_adjusts_against_color():
    assert japanese_komi(6.5, 21, Stone.BLACK) == 7.5
    assert japanese_komi(6.5, 21, Stone.WHITE) == 5.5


def test_japanese_komi_keeps_odd_komi():
    assert japanese_komi(7.5, 21, Stone.BLACK) == 7.5
    assert japanese_komi(7.5, 21, Stone.WHITE) == 7.5


def test_japanese_komi_depends_on_board_parity():
    assert japanese_komi(6.5, 20, Stone.BLACK) == 6.5
    assert japanese_komi(7.5, 20, Stone.BLACK) == 7.5 + 1


def test_chat_winrate_value(tree):
    tree.root.u.value = 0.25
    winrate, extra = chat_winrate(tree)
    assert winrate == pytest.approx(tree.node_value(-1, 0.25))
    assert extra == 0.0


def test_chat_winrate_extra_komi(tree):
    tree.use_extra_komi = True
    tree.extra_komi = 2.0
    assert chat_winrate(tree)[1] == 2.0
    tree.extra_komi = 0.3
    assert chat_winrate(tree)[1] == 0.0
    tree.use_extra_komi = False
    tree.extra_komi = 2.0
    assert chat_winrate(tree)[1] == 0.0


def test_check_alternating_accepts_side_to_move(tree):
    assert check_alternating(tree, Stone.BLACK) == Stone.BLACK


def test_check_alternating_rejects_same_side(tree):
    with pytest.raises(ValueError, match="Non-alternating"):
        check_alternating(tree, Stone.WHITE)


def test_check_alternating_white_tree():
    tree = Tree(21, Stone.WHITE)
    assert check_alternating(tree, Stone.WHITE) == Stone.WHITE
    with pytest.raises(ValueError):
        check_alternating(tree, Stone.BLACK)