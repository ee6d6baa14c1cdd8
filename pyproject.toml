[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dedupgo"
version = "0.1.0"
description = "Find files with identical content by hash, report them, and move extra copies to the trash"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["duplicates", "dedup", "files", "hash", "trash", "cleanup"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
dedupgo = "dedupgo.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["dedupgo"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
