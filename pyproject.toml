[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "uctgo"
version = "0.1.0"
description = "Core data structures of a UCT (Monte Carlo tree search) Go engine: move statistics, search trees, tree books, engine settings and report helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["go", "baduk", "weiqi", "mcts", "uct", "monte-carlo", "game-tree"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["uctgo"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
