[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "confdb"
version = "0.1.0"
description = "Two-level JSON configuration database with diff, search and inspection tooling"
requires-python = ">=3.10"
dependencies = []
keywords = ["configuration", "json", "database", "diff", "config"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
confdb-tool = "confdb.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["confdb"]

[tool.pytest.ini_options]
addopts = "-ra"
