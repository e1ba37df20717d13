# uctgo

Building blocks for a Go playing engine based on UCT (Monte Carlo tree
search). The package covers the search tree and its statistics, saved
opening trees ("tbooks"), the engine settings and a few engine-level report
helpers. It needs only the standard library.

## Modules

- `uctgo.stats`: `MoveStats` holds a playout count and a mean value
  (black wins per playout). `add_result`, `rm_result`, `merge` and
  `reverse_parity` update it in place.
- `uctgo.tree`: the search tree.
  - `Tree` holds the root node, the black and white local trees, the root
    colour, extra komi, average score and a node count (`nodes_size`)
    checked against an optional node budget (`max_tree_size`).
  - `Tree.get_node` finds or creates a child, keeping children sorted by
    coordinate. `Tree.new_node` allocates a node and returns `None` once the
    budget is spent.
  - The parity helpers are `node_parity`, `black_parity` and `node_value`.
    `lnode_for_node` matches a node to its local tree node.
  - `TreeNode` carries its stats (`u`, `prior`, `amaf`, `pu`,
    `winner_owner`, `black_owner`), along with `is_leaf`, `iter_children`
    and `criticality`.
  - Coordinates use a board with a one-point border (19x19 is `size=21`).
    The helpers are `coord_xy`, `coord_x`, `coord_y` and `coord2str` (for
    example `D4`, `pass`, `resign`). Also here are `Stone` and
    `BoardSymmetry`.
- `uctgo.treeio`: tree books and dumps.
  - `tbook_name` gives the book file name for a board size, komi and
    handicap.
  - `save_tree` writes a tree. Children of nodes with fewer playouts than
    the threshold are left out.
  - `load_tree` reads a book into a tree's root and returns the number of
    nodes read. A missing file reads nothing and returns 0. Playout counts
    are capped at 10,000,000.
  - `dump_tree` prints the tree, with children sorted by playouts, to a
    stream (stderr by default).
- `uctgo.config`: `UctConfig`, a dataclass of every engine setting with its
  default, plus the enums `Reporting`, `ThreadModel` and `LocalTreeEval`.
  `UctConfig.finalize()` fills in derived values and raises `ConfigError`
  on inconsistent settings. The derived values are:
  - the default policy, playout and dynkomi;
  - pruning threshold and pruned-space sizes;
  - slave hash and sharing defaults.
- `uctgo.engine`: engine-level helpers.
  - `engine_comment` builds the banner text.
  - `format_result` builds the `result` reply: colour, move, playouts, win
    rate and extra komi.
  - `japanese_komi` moves komi one point against the player when the
    scoring parity calls for it.
  - `chat_winrate` returns the win rate and extra komi that are reported.
  - `check_alternating` raises `ValueError` on non-alternating play.

## Example

```python
import io

from uctgo.config import UctConfig
from uctgo.tree import Stone, Tree, coord_xy
from uctgo.treeio import dump_tree, tbook_name

config = UctConfig(board_size=11, threads=2, resign_threshold=0.15).finalize()
print(config.policy, config.dynkomi)      # ucb1amaf none

tree = Tree(11, Stone.BLACK)              # 9x9 board plus its border
child = tree.get_node(tree.root, coord_xy(11, 3, 3), True)
child.u.add_result(1.0, 10)
print(child.u.playouts, child.u.value)    # 10 1.0

out = io.StringIO()
dump_tree(tree, 0, out)
print(tbook_name(21, 7.5, 0))             # ucttbook-19-7.5.pachitree
```

## What it does not do

The package has no search of its own. It does not run playouts, run search
threads, decide when to stop thinking or pick a move to play. It does not
parse option strings; settings are given as `UctConfig` fields. It does not
promote played moves to the root, prune, garbage collect or age a tree. It
has no command-line program and does not speak any game protocol.

## Running the tests

```
pip install -e .[test]
pytest
```