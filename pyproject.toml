[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wallefmt"
version = "0.1.0"
description = "Unpack and repack WALL-E game object formats to and from JSON and common file types"
requires-python = ">=3.10"
keywords = ["game", "assets", "binary", "unpack", "json", "dds", "wav", "obj"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: File Formats",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["wallefmt"]

[tool.pytest.ini_options]
addopts = "-ra"
