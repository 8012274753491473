[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fzfcore"
version = "0.44.0"
description = "Fuzzy matching core: scoring algorithms, Latin letter normalization, chunked item storage, result caching and query history."
requires-python = ">=3.10"
dependencies = []
keywords = ["fuzzy", "finder", "matching", "search", "filter", "scoring"]
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
    "Topic :: Text Processing :: Filters",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fzfcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
