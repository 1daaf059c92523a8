[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "battlesim"
version = "0.1.0"
description = "A tile-based battle simulator: place units on a Tiled map and watch them hunt the enemy."
requires-python = ">=3.10"
keywords = ["game", "simulation", "tiled", "tmx", "pathfinding", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Real Time Strategy",
    "Topic :: Games/Entertainment :: Simulation",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
battlesim = "battlesim.view_manager:main"

[tool.hatch.build.targets.wheel]
packages = ["battlesim"]

[tool.pytest.ini_options]
addopts = "-ra"
