[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "ragesim"
version = "0.1.0"
description = "Stats, items, cooldown scheduling, buff tracking and combat formulas for a melee warrior damage simulator"
requires-python = ">=3.10"
dependencies = []
keywords = ["simulation", "combat", "dps", "warrior", "game mechanics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["ragesim*"]

[tool.pytest.ini_options]
addopts = "-ra"
