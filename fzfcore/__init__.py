"""Fuzzy matching core: scoring algorithms, letter normalization, chunked storage, caching and history."""

__version__ = "0.44.0"

__all__ = [
    "algo",
    "algo_core",
    "cache",
    "chunklist",
    "constants",
    "history",
    "latin_table",
    "normalize",
]