[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nesed"
version = "0.1.0"
description = "Tile map, attribute and collision editor for NES background screens"
requires-python = ">=3.10"
keywords = ["nes", "tilemap", "nametable", "editor", "chr", "tga", "palette", "homebrew"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Editors",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
nesed = "nesed.editor:main"

[tool.hatch.build.targets.wheel]
packages = ["nesed"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
