"""Per-chunk cache of match results keyed by query string."""

from __future__ import annotations

import threading
from typing import Any, Optional, Sequence

from fzfcore.chunklist import Chunk
from fzfcore.constants import QUERY_CACHE_MAX


class ChunkCache:
    """Maps a full chunk and a query to the results found for it."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cache: dict[Chunk, dict[str, Sequence[Any]]] = {}

    def add(self, chunk: Chunk, key: str, results: Sequence[Any]) -> None:
        """Remember ``results`` unless the key is empty, the chunk is not
        full, or the results are too many to be worth keeping."""
        if not key or not chunk.is_full() or len(results) > QUERY_CACHE_MAX:
            return
        with self._lock:
            self._cache.setdefault(chunk, {})[key] = results

    def lookup(self, chunk: Chunk, key: str) -> Optional[Sequence[Any]]:
        """Return the results stored for exactly ``key``, or ``None``."""
        if not key or not chunk.is_full():
            return None
        with self._lock:
            return self._cache.get(chunk, {}).get(key)

    def search(self, chunk: Chunk, key: str) -> Optional[Sequence[Any]]:
        """Return the results of the longest cached prefix or suffix of ``key``.

        At each length the prefix is tried before the suffix; ``key`` itself
        is not considered.
        """
        if not key or not chunk.is_full():
            return None
        with self._lock:
            queries = self._cache.get(chunk)
            if queries is None:
                return None
            for cut in range(1, len(key)):
                for substring in (key[: len(key) - cut], key[cut:]):
                    cached = queries.get(substring)
                    if cached is not None:
                        return cached
        return None