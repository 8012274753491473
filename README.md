# fzfcore

The matching core of a fuzzy finder, as a plain Python library with no
dependencies outside the standard library.

## Modules

- `fzfcore.algo_core`: the shared scoring machinery.
  - `CharClass`, `char_class_of`, `bonus_for` and `bonus_at` classify characters and compute
    boundary bonuses.
  - `calculate_score` scores a given span. `ascii_fuzzy_index` quickly rejects ASCII text that
    cannot match.
  - `fuzzy_match_v1` is the greedy fuzzy matcher.
  - `MatchResult` holds `start`, `end`, `score` and `matched`.
  - `init_scheme("default" | "path" | "history")` switches the bonus scheme and raises
    `ValueError` for any other name.
- `fzfcore.algo`: the other matchers. `fuzzy_match_v2` finds the optimal fuzzy alignment and
  falls back to `fuzzy_match_v1` for very large inputs. The others are `exact_match_naive`,
  `prefix_match`, `suffix_match` and `equal_match`. Each one returns a `MatchResult` together
  with the matched positions, or `None`.
- `fzfcore.normalize`: `normalize_rune` and `normalize_runes` fold accented and variant Latin
  letters to their plain base letters, keeping case.
- `fzfcore.latin_table`: the folding table `NORMALIZED` and `lowercase_base(char)`.
- `fzfcore.chunklist`: `Chunk`, `ChunkList` and `count_items`. Items are built through a
  callable and stored in chunks of `CHUNK_SIZE` (100). `ChunkList.snapshot()` returns the chunks
  and the item count, so later pushes do not appear in it.
- `fzfcore.cache`: `ChunkCache` keeps match results per full chunk and query. It offers exact
  `lookup` and prefix/suffix `search`.
- `fzfcore.history`: `History` is a file-backed query history with a size limit and
  `previous`/`next`/`current`/`override`/`append`. It raises `HistoryError` when the file cannot
  be read or created.
- `fzfcore.constants`: the `EventType` and `ExitCode` enums, tuning limits, and
  `default_command(platform, term)`.

## Example

```python
from fzfcore.algo import fuzzy_match_v2

result, positions = fuzzy_match_v2(False, False, True, "foo/bar/baz", "fbb", True)
print(result.start, result.end, result.score, sorted(positions))  # 0 9 76 [0, 4, 8]
```

A case-insensitive match expects the pattern in lower case. A normalized match expects the
pattern already normalized.

## What it does not do

This is a library only. It has no command to run and no interactive screen. It does not read
input streams, and it does not run the default listing command that `default_command` returns.
It does not interpret or strip ANSI color escape sequences. It has no merging or sorting of
results across chunks.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```