[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "broadside"
version = "0.1.0"
description = "A terminal Battleship game against a hunt-and-target or probability-grid computer opponent"
requires-python = ">=3.10"
dependencies = []
keywords = ["battleship", "game", "terminal", "board game"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
broadside = "broadside.game:main"

[tool.hatch.build.targets.wheel]
packages = ["broadside"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
