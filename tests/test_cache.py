import pytest

from fzfcore.cache import ChunkCache
from fzfcore.chunklist import Chunk
from fzfcore.constants import CHUNK_SIZE, QUERY_CACHE_MAX


@pytest.fixture
def full_chunk():
    return Chunk([object() for _ in range(CHUNK_SIZE)])


@pytest.fixture
def partial_chunk():
    return Chunk()


def test_chunk_cache(full_chunk, partial_chunk):
    cache = ChunkCache()
    items1 = ["r1"]
    items2 = ["r1", "r2"]
    cache.add(partial_chunk, "foo", items1)
    cache.add(full_chunk, "foo", items1)
    cache.add(full_chunk, "bar", items2)

    # partial chunk is not cached
    assert cache.lookup(partial_chunk, "foo") is None

    cached = cache.lookup(full_chunk, "foo")
    assert cached is not None and len(cached) == 1

    cached = cache.lookup(full_chunk, "bar")
    assert cached is not None and len(cached) == 2

    assert cache.lookup(partial_chunk, "foobar") is None


def test_empty_key_is_ignored(full_chunk):
    cache = ChunkCache()
    cache.add(full_chunk, "", ["r"])
    assert cache.lookup(full_chunk, "") is None
    assert cache.search(full_chunk, "") is None


def test_large_result_lists_are_not_cached(full_chunk):
    cache = ChunkCache()
    cache.add(full_chunk, "big", ["r"] * (QUERY_CACHE_MAX + 1))
    cache.add(full_chunk, "edge", ["r"] * QUERY_CACHE_MAX)
    assert cache.lookup(full_chunk, "big") is None
    assert cache.lookup(full_chunk, "edge") == ["r"] * QUERY_CACHE_MAX


def test_lookup_is_per_chunk(full_chunk):
    other = Chunk(list(full_chunk.items))
    cache = ChunkCache()
    cache.add(full_chunk, "foo", ["r"])
    assert cache.lookup(other, "foo") is None


def test_search_finds_prefix(full_chunk):
    cache = ChunkCache()
    cache.add(full_chunk, "foo", ["prefix"])
    assert cache.search(full_chunk, "foob") == ["prefix"]
    assert cache.search(full_chunk, "foobar") == ["prefix"]


def test_search_finds_suffix(full_chunk):
    cache = ChunkCache()
    cache.add(full_chunk, "foo", ["suffix"])
    assert cache.search(full_chunk, "xfoo") == ["suffix"]


def test_search_prefers_longer_substring(full_chunk):
    cache = ChunkCache()
    cache.add(full_chunk, "f", ["short"])
    cache.add(full_chunk, "foo", ["long"])
    assert cache.search(full_chunk, "foob") == ["long"]


def test_search_prefers_prefix_at_same_length(full_chunk):
    cache = ChunkCache()
    cache.add(full_chunk, "ab", ["prefix"])
    cache.add(full_chunk, "bc", ["suffix"])
    assert cache.search(full_chunk, "abc") == ["prefix"]


def test_search_ignores_exact_key(full_chunk):
    cache = ChunkCache()
    cache.add(full_chunk, "foo", ["r"])
    assert cache.search(full_chunk, "foo") is None


def test_search_misses(full_chunk, partial_chunk):
    cache = ChunkCache()
    assert cache.search(full_chunk, "foo") is None
    cache.add(full_chunk, "zzz", ["r"])
    assert cache.search(full_chunk, "foo") is None
    assert cache.search(partial_chunk, "zzzz") is None