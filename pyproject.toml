[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wolfcast"
version = "0.1.0"
description = "A small grid-map raycasting explorer with textured walls and a minimap"
requires-python = ">=3.10"
keywords = ["raycasting", "game", "maze", "pygame", "first-person"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: First Person Shooters",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
wolfcast = "wolfcast.app:main"

[tool.hatch.build.targets.wheel]
packages = ["wolfcast"]

[tool.pytest.ini_options]
addopts = "-ra"
