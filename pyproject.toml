[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "irunique"
version = "0.1.0"
description = "Uniqued storage, interned IR types and use-def chains for compiler intermediate representations"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "ir", "ssa", "use-def", "interning", "uniquing"]
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
packages = ["irunique"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
