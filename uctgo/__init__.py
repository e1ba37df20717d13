"""UCT Go engine core: move statistics, search trees, tree books, settings and report helpers."""

__version__ = "0.1.0"