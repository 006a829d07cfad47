[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nirvana"
version = "0.1.0"
description = "A small tile-based side-scrolling platformer built on an entity-component system"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "platformer", "entity-component-system", "quadtree", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
nirvana = "nirvana.game:main"

[tool.hatch.build.targets.wheel]
packages = ["nirvana"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
