import io

import pytest

from uctgo.tree import Stone, Tree, coord2str, coord_xy
from uctgo.treeio import MAX_PLAYOUTS, dump_tree, load_tree, save_tree, tbook_name

SIZE = 21


def build():
    tree = Tree(SIZE, Stone.BLACK)
    tree.root.u.playouts = 100
    tree.root.is_expanded = True
    a = tree.get_node(tree.root, coord_xy(SIZE, 3, 3), True)
    b = tree.get_node(tree.root, coord_xy(SIZE, 4, 4), True)
    aa = tree.get_node(a, coord_xy(SIZE, 5, 5), True)
    a.u.playouts, a.u.value = 60, 0.25
    a.amaf.playouts, a.amaf.value = 30, 0.75
    a.is_expanded = True
    b.u.playouts, b.u.value = 30, 0.5
    aa.u.playouts = 2
    return tree, a, b, aa


def shape(node):
    return (node.coord, node.u.playouts, node.u.value, [shape(c) for c in node.children])


def test_tbook_name_format():
    assert tbook_name(SIZE, 7.5, 0) == "ucttbook-19-7.5.pachitree"
    assert tbook_name(SIZE, 0.5, 2) == "ucttbook-19-0.5-h2.pachitree"


def test_save_load_round_trip(tmp_path):
    tree, a, _, _ = build()
    path = tmp_path / "book.pachitree"
    save_tree(tree, path, 0)
    fresh = Tree(SIZE, Stone.BLACK)
    count = load_tree(fresh, path)
    assert count == 4
    assert shape(fresh.root) == shape(tree.root)
    loaded_a = fresh.root.children[0]
    assert loaded_a.amaf == a.amaf
    assert loaded_a.pu == loaded_a.u
    assert loaded_a.parent is fresh.root
    assert loaded_a.is_expanded is True


def test_threshold_drops_children(tmp_path):
    tree, _, _, _ = build()
    path = tmp_path / "book"
    save_tree(tree, path, 50)
    fresh = Tree(SIZE, Stone.BLACK)
    load_tree(fresh, path)
    a = fresh.root.children[0]
    b = fresh.root.children[1]
    assert a.children != [] and a.is_expanded
    assert b.children == [] and b.is_expanded is False
    assert tree.root.children[0].is_expanded is True


def test_load_caps_playouts(tmp_path):
    tree, a, _, _ = build()
    a.u.playouts = MAX_PLAYOUTS * 3
    a.amaf.playouts = MAX_PLAYOUTS + 1
    path = tmp_path / "book"
    save_tree(tree, path, 0)
    fresh = Tree(SIZE, Stone.BLACK)
    load_tree(fresh, path)
    loaded = fresh.root.children[0]
    assert loaded.u.playouts == MAX_PLAYOUTS
    assert loaded.amaf.playouts == MAX_PLAYOUTS
    assert loaded.pu.playouts == MAX_PLAYOUTS


def test_load_missing_file(tmp_path):
    tree = Tree(SIZE, Stone.BLACK)
    assert load_tree(tree, tmp_path / "absent") == 0
    assert tree.root.children == []


def test_load_truncated_file(tmp_path):
    tree, _, _, _ = build()
    path = tmp_path / "book"
    save_tree(tree, path, 0)
    data = path.read_bytes()
    path.write_bytes(data[: len(data) // 2])
    with pytest.raises(ValueError):
        load_tree(Tree(SIZE, Stone.BLACK), path)


def test_dump_orders_by_playouts():
    tree, a, b, aa = build()
    out = io.StringIO()
    dump_tree(tree, 0, out)
    text = out.getvalue()
    lines = text.splitlines()
    assert lines[0].startswith("(UCT tree; root white;")
    assert lines[1].startswith("[pass]")
    name_a = coord2str(a.coord, SIZE)
    name_b = coord2str(b.coord, SIZE)
    assert text.index(f" [{name_a}]") < text.index(f" [{name_b}]")
    assert f"  [{coord2str(aa.coord, SIZE)}]" in text


def test_dump_threshold_hides_small_nodes():
    tree, _, b, aa = build()
    out = io.StringIO()
    dump_tree(tree, 0.5, out)
    text = out.getvalue()
    assert f"[{coord2str(b.coord, SIZE)}]" not in text
    assert f"[{coord2str(aa.coord, SIZE)}]" not in text
    assert len(text.splitlines()) == 3