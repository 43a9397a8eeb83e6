[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cfgsets"
version = "0.1.0"
description = "Context-free grammar toolkit: symbols, FIRST/FOLLOW/LAST sets, minimal distances and sequence rewriting"
requires-python = ">=3.10"
dependencies = []
keywords = ["grammar", "context-free", "parsing", "first-sets", "follow-sets", "sequence"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cfgsets"]

[tool.pytest.ini_options]
addopts = "-ra"
