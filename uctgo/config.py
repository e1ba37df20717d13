"""Settings of the UCT engine, with their defaults and final consistency pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from uctgo.tree import TREE_NODE_D_MAX, Stone

# Share of ownermap counts of one colour needed to call a point sure.
GJ_THRES = 0.8
# Minimal number of games before groups are judged.
GJ_MINGAMES = 500
# Playouts a local sequence contributes to the local tree.
LTREE_PLAYOUTS_MULTIPLIER = 100

# Maximal simulation length in moves.
MAX_GAMELEN = 600

MIB = 1048576
DEFAULT_MAX_TREE_SIZE = 1408 * MIB

# Distributed engine defaults for slaves.
DEFAULT_STATS_HBITS = 21
DEFAULT_SHARED_NODES = 10240
# Coordinate paths are packed into this many bits.
PATH_BITS = 64

# Bordered board sizes up to this count as small boards (9x9 and less).
SMALL_BOARD_SIZE = 9 + 2


class ConfigError(ValueError):
    """An engine setting is invalid or inconsistent with others."""


class Reporting(Enum):
    TEXT = "text"
    JSON = "json"
    JSON_BIG = "jsonbig"


class ThreadModel(Enum):
    TREE = "tree"  # All threads share the tree, without virtual loss.
    TREEVL = "treevl"  # Shared tree with virtual losses.


class LocalTreeEval(Enum):
    ROOT = "root"
    EACH = "each"
    TOTAL = "total"


@dataclass
class UctConfig:
    """All tunable settings of the UCT engine.

    Tree sizes are in bytes as given by the user; ``finalize`` splits the
    budget between the tree and the pruning space.
    """

    board_size: int = 21

    debug_level: int = 0
    reporting: Reporting = Reporting.TEXT
    reportfreq: int = 10000
    dumpthres: float = 0.01

    gamelen: int = MAX_GAMELEN
    resign_threshold: float = 0.2
    sure_win_threshold: float = 0.95
    best2_ratio: float = 2.5
    bestr_ratio: float = 0.02
    max_maintime_ratio: float = 2.0
    fuseki_end: int = 20
    yose_start: int = 40

    pass_all_alive: bool = False
    allow_losing_pass: bool = False
    territory_scoring: bool = False
    stones_only: bool = False
    expand_p: int = 8
    playout_amaf: bool = True
    amaf_prior: bool = False
    playout_amaf_cutoff: int = 0
    force_seed: int = 0
    no_tbook: bool = False
    mercymin: int = 0
    significant_threshold: int = 50

    fast_alloc: bool = True
    max_tree_size: int = DEFAULT_MAX_TREE_SIZE
    max_pruned_size: int = 0
    pruning_threshold: int = 0

    threads: int = 1
    thread_model: ThreadModel = ThreadModel.TREEVL
    virtual_loss: int = 1
    pondering_opt: bool = True

    slave: bool = False
    max_slaves: int = -1
    slave_index: int = -1
    shared_nodes: int = 0
    shared_levels: int = 1
    stats_hbits: int = 0
    stats_delay: float = 0.01  # seconds

    dynkomi: Optional[str] = None
    dynkomi_args: Optional[str] = None
    dynkomi_mask: int = Stone.BLACK | Stone.WHITE
    dynkomi_interval: int = 1000
    initial_extra_komi: float = 0.0

    val_scale: float = 0.0
    val_points: int = 40
    val_extra: bool = False
    val_byavg: bool = False
    val_bytemp: bool = False
    val_bytemp_min: float = 0.0

    random_policy_chance: int = 0
    local_tree: bool = False
    tenuki_d: int = 4
    local_tree_aging: float = 80.0
    local_tree_depth_decay: float = 1.5
    local_tree_allseq: bool = False
    local_tree_neival: bool = True
    local_tree_eval: LocalTreeEval = LocalTreeEval.ROOT
    local_tree_rootchoose: bool = False

    debug_after_level: int = 0
    debug_after_playouts: int = 0
    banner: Optional[str] = None

    policy: Optional[str] = None
    policy_args: Optional[str] = None
    random_policy: Optional[str] = None
    random_policy_args: Optional[str] = None
    playout: Optional[str] = None
    playout_args: Optional[str] = None
    playout_debug_level: int = 0
    prior_args: Optional[str] = None
    plugins: list[tuple[str, Optional[str]]] = field(default_factory=list)
    want_pat: bool = False
    pattern_args: Optional[str] = None

    _finalized: bool = field(default=False, init=False, repr=False, compare=False)

    @property
    def board_small(self) -> bool:
        return self.board_size <= SMALL_BOARD_SIZE

    def finalize(self) -> UctConfig:
        """Fill in derived defaults and check consistency; safe to call twice."""
        if self._finalized:
            return self

        if self.tenuki_d > TREE_NODE_D_MAX + 1:
            raise ConfigError(
                f"tenuki_d must not be larger than TREE_NODE_D_MAX+1 {TREE_NODE_D_MAX + 1}"
            )
        if self.policy is None:
            self.policy = "ucb1amaf"
        if bool(self.random_policy_chance) != bool(self.random_policy):
            raise ConfigError("Only one of random_policy and random_policy_chance is set")

        if not self.local_tree:
            # No local tree aging.
            self.local_tree_aging = 1.0

        if self.fast_alloc:
            self.pruning_threshold = max(self.pruning_threshold, self.max_tree_size // 10)
            self.pruning_threshold = min(self.pruning_threshold, self.max_tree_size // 2)
            # Pruning temp space takes 20% of the memory.
            self.max_pruned_size = self.max_tree_size // 5
            self.max_tree_size -= self.max_pruned_size
        else:
            # Reserve 5% for frees lagging behind allocations.
            self.max_tree_size -= self.max_tree_size // 20

        if self.playout is None:
            self.playout = "moggy"
        if not self.playout_debug_level:
            self.playout_debug_level = self.debug_level

        if self.slave:
            if not self.stats_hbits:
                self.stats_hbits = DEFAULT_STATS_HBITS
            if not self.shared_nodes:
                self.shared_nodes = DEFAULT_SHARED_NODES
            bits2 = (self.board_size * self.board_size - 1).bit_length()
            if self.shared_levels * bits2 > PATH_BITS:
                raise ConfigError(
                    f"shared_levels {self.shared_levels} too deep for the coordinate path"
                )

        if self.dynkomi is None:
            self.dynkomi = "none" if self.board_small else "linear"

        self._finalized = True
        return self