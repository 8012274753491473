"""Append-only list of items stored in fixed-size chunks."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional, Sequence

from fzfcore.constants import CHUNK_SIZE

ItemBuilder = Callable[[bytes], Optional[Any]]
"""Builds an item from raw input, or returns ``None`` to skip it."""


@dataclass(eq=False)
class Chunk:
    """A group of at most ``CHUNK_SIZE`` items.

    Chunks compare and hash by identity so that they can key caches.
    """

    items: list[Any] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Any:
        return self.items[index]

    def push(self, trans: ItemBuilder, data: bytes) -> bool:
        """Build an item from ``data`` and add it; return whether one was added."""
        if self.is_full():
            raise IndexError("chunk is full")
        item = trans(data)
        if item is None:
            return False
        self.items.append(item)
        return True

    def is_full(self) -> bool:
        return len(self.items) == CHUNK_SIZE


def count_items(chunks: Sequence[Chunk]) -> int:
    """Return the total number of items in a list of chunks."""
    if not chunks:
        return 0
    return CHUNK_SIZE * (len(chunks) - 1) + chunks[-1].count


class ChunkList:
    """Thread-safe list of chunks filled through an item builder."""

    def __init__(self, trans: ItemBuilder) -> None:
        self.trans = trans
        self._chunks: list[Chunk] = []
        self._lock = threading.Lock()

    def push(self, data: bytes) -> bool:
        """Add an item built from ``data``; return whether one was added."""
        with self._lock:
            if not self._chunks or self._chunks[-1].is_full():
                self._chunks.append(Chunk())
            return self._chunks[-1].push(self.trans, data)

    def clear(self) -> None:
        with self._lock:
            self._chunks = []

    def snapshot(self) -> tuple[list[Chunk], int]:
        """Return the current chunks and the total item count.

        The last chunk is copied, so later pushes do not show through.
        """
        with self._lock:
            chunks = list(self._chunks)
            if chunks:
                chunks[-1] = Chunk(list(chunks[-1].items))
        return chunks, count_items(chunks)