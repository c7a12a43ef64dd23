[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rairserver"
version = "0.1.0"
description = "Game-world logic for a multi-user dungeon server: pathfinding, field of view, spawning, profanity filtering and game-loop message handling."
requires-python = ">=3.10"
dependencies = []
keywords = ["mud", "game-server", "pathfinding", "field-of-view", "shadowcasting", "profanity-filter"]
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
    "Topic :: Games/Entertainment :: Multi-User Dungeons (MUD)",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rairserver"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
