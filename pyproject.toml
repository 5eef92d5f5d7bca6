[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "schemamigrate"
version = "4.0.0"
description = "Migration sources: discover, order and read versioned up/down schema migration files"
requires-python = ">=3.10"
dependencies = []
keywords = ["migrations", "database", "schema", "sql", "versioning"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["schemamigrate"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
