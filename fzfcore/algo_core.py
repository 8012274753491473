"""Character classes, bonus scoring and the greedy fuzzy matcher.

Matching functions assume that the pattern is already lower-case when the
match is case-insensitive and already normalized when ``normalize`` is set.
"""

from __future__ import annotations

import os
import unicodedata
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence

from fzfcore.normalize import normalize_rune

SCORE_MATCH = 16
SCORE_GAP_START = -3
SCORE_GAP_EXTENSION = -1

# Bonus for a match at the beginning of a word; cancelled out once the gap
# between matched characters grows beyond about eight characters.
BONUS_BOUNDARY = SCORE_MATCH // 2

# Bonus for matched non-word characters, used for consecutive chunks that
# start with a non-word character.
BONUS_NON_WORD = SCORE_MATCH // 2

# Bonus for camelCase and letter-to-digit transitions.
BONUS_CAMEL123 = BONUS_BOUNDARY + SCORE_GAP_EXTENSION

# Minimum bonus given to every character of a consecutive chunk.
BONUS_CONSECUTIVE = -(SCORE_GAP_START + SCORE_GAP_EXTENSION)

# The bonus at the first pattern character is multiplied by this.
BONUS_FIRST_CHAR_MULTIPLIER = 2

_ASCII_WHITE = " \t\n\v\f\r"


class CharClass(IntEnum):
    """Kinds of characters that decide where word boundaries are."""

    WHITE = 0
    NON_WORD = 1
    DELIMITER = 2
    LOWER = 3
    UPPER = 4
    LETTER = 5
    NUMBER = 6


@dataclass
class Scheme:
    """The scoring parameters that depend on the chosen scheme."""

    bonus_boundary_white: int = BONUS_BOUNDARY + 2
    bonus_boundary_delimiter: int = BONUS_BOUNDARY + 1
    delimiter_chars: str = "/,:;|"
    initial_char_class: CharClass = CharClass.WHITE


SCHEME = Scheme()
"""The scheme in effect for all matching functions."""


@dataclass(frozen=True)
class MatchResult:
    """Span of a match in characters and its score."""

    start: int
    end: int
    score: int

    @property
    def matched(self) -> bool:
        return self.start >= 0


NO_MATCH = MatchResult(-1, -1, 0)


def init_scheme(scheme: str) -> None:
    """Switch the scoring scheme to ``default``, ``path`` or ``history``.

    Raises ``ValueError`` for any other name.
    """
    if scheme == "default":
        SCHEME.bonus_boundary_white = BONUS_BOUNDARY + 2
        SCHEME.bonus_boundary_delimiter = BONUS_BOUNDARY + 1
    elif scheme == "path":
        SCHEME.bonus_boundary_white = BONUS_BOUNDARY
        SCHEME.bonus_boundary_delimiter = BONUS_BOUNDARY + 1
        SCHEME.delimiter_chars = "/" if os.sep == "/" else os.sep + "/"
        SCHEME.initial_char_class = CharClass.DELIMITER
    elif scheme == "history":
        SCHEME.bonus_boundary_white = BONUS_BOUNDARY
        SCHEME.bonus_boundary_delimiter = BONUS_BOUNDARY
    else:
        raise ValueError(f"unknown scoring scheme: {scheme!r}")


def _char_class_of_ascii(char: str) -> CharClass:
    if "a" <= char <= "z":
        return CharClass.LOWER
    if "A" <= char <= "Z":
        return CharClass.UPPER
    if "0" <= char <= "9":
        return CharClass.NUMBER
    if char in _ASCII_WHITE:
        return CharClass.WHITE
    if char in SCHEME.delimiter_chars:
        return CharClass.DELIMITER
    return CharClass.NON_WORD


def _char_class_of_non_ascii(char: str) -> CharClass:
    category = unicodedata.category(char)
    if category == "Ll":
        return CharClass.LOWER
    if category == "Lu":
        return CharClass.UPPER
    if category[0] == "N":
        return CharClass.NUMBER
    if category[0] == "L":
        return CharClass.LETTER
    if char.isspace():
        return CharClass.WHITE
    if char in SCHEME.delimiter_chars:
        return CharClass.DELIMITER
    return CharClass.NON_WORD


def char_class_of(char: str) -> CharClass:
    """Return the class of a single character."""
    if ord(char) <= 0x7F:
        return _char_class_of_ascii(char)
    return _char_class_of_non_ascii(char)


def bonus_for(prev_class: CharClass, cls: CharClass) -> int:
    """Return the bonus for a character of class ``cls`` after ``prev_class``."""
    if cls > CharClass.NON_WORD:
        if prev_class == CharClass.WHITE:
            return SCHEME.bonus_boundary_white
        if prev_class == CharClass.DELIMITER:
            return SCHEME.bonus_boundary_delimiter
        if prev_class == CharClass.NON_WORD:
            return BONUS_BOUNDARY
    if (prev_class == CharClass.LOWER and cls == CharClass.UPPER) or (
        prev_class != CharClass.NUMBER and cls == CharClass.NUMBER
    ):
        return BONUS_CAMEL123
    if cls == CharClass.NON_WORD:
        return BONUS_NON_WORD
    if cls == CharClass.WHITE:
        return SCHEME.bonus_boundary_white
    return 0


def bonus_at(text: str, index: int) -> int:
    """Return the bonus of the character at ``index`` of ``text``."""
    if index == 0:
        return SCHEME.bonus_boundary_white
    return bonus_for(char_class_of(text[index - 1]), char_class_of(text[index]))


def _to_lower(char: str) -> str:
    lowered = char.lower()
    return lowered[0] if lowered else char


def _fold(char: str, case_sensitive: bool) -> str:
    if not case_sensitive:
        if "A" <= char <= "Z":
            return chr(ord(char) + 32)
        if ord(char) > 0x7F:
            return _to_lower(char)
    return char


def _index_at(index: int, size: int, forward: bool) -> int:
    return index if forward else size - index - 1


def _try_skip(text: str, case_sensitive: bool, char: str, start: int) -> int:
    rest = text[start:]
    idx = rest.find(char)
    if idx == 0:
        return start
    if not case_sensitive and "a" <= char <= "z":
        upper_idx = (rest[:idx] if idx > 0 else rest).find(char.upper())
        if upper_idx >= 0:
            idx = upper_idx
    if idx < 0:
        return -1
    return start + idx


def ascii_fuzzy_index(text: str, pattern: Sequence[str], case_sensitive: bool) -> int:
    """Quickly check whether an ASCII ``text`` can match ``pattern``.

    Returns -1 when no match is possible, otherwise the index from which
    scoring should start. Non-ASCII text cannot be judged and gives 0.
    """
    if not text.isascii():
        return 0
    if not all(ord(char) < 0x80 for char in pattern):
        return -1
    first_idx = idx = 0
    for pidx, char in enumerate(pattern):
        idx = _try_skip(text, case_sensitive, char, idx)
        if idx < 0:
            return -1
        if pidx == 0 and idx > 0:
            # Step back one character to see the bonus of the first match.
            first_idx = idx - 1
        idx += 1
    return first_idx


def calculate_score(
    case_sensitive: bool,
    normalize: bool,
    text: str,
    pattern: Sequence[str],
    sidx: int,
    eidx: int,
    with_pos: bool,
) -> tuple[int, Optional[list[int]]]:
    """Score the match of ``pattern`` in ``text[sidx:eidx]``.

    Returns the score and, when ``with_pos`` is set, the matched positions.
    """
    pidx = score = consecutive = first_bonus = 0
    in_gap = False
    positions: Optional[list[int]] = [] if with_pos else None
    prev_class = SCHEME.initial_char_class
    if sidx > 0:
        prev_class = char_class_of(text[sidx - 1])
    for idx in range(sidx, eidx):
        char = text[idx]
        cls = char_class_of(char)
        char = _fold(char, case_sensitive)
        if normalize:
            char = normalize_rune(char)
        if char == pattern[pidx]:
            if positions is not None:
                positions.append(idx)
            score += SCORE_MATCH
            bonus = bonus_for(prev_class, cls)
            if consecutive == 0:
                first_bonus = bonus
            else:
                # A stronger boundary starts a new consecutive chunk.
                if bonus >= BONUS_BOUNDARY and bonus > first_bonus:
                    first_bonus = bonus
                bonus = max(bonus, first_bonus, BONUS_CONSECUTIVE)
            if pidx == 0:
                score += bonus * BONUS_FIRST_CHAR_MULTIPLIER
            else:
                score += bonus
            in_gap = False
            consecutive += 1
            pidx += 1
        else:
            score += SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START
            in_gap = True
            consecutive = 0
            first_bonus = 0
        prev_class = cls
    return score, positions


def fuzzy_match_v1(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: Sequence[str],
    with_pos: bool = False,
) -> tuple[MatchResult, Optional[list[int]]]:
    """Find the first fuzzy occurrence of ``pattern`` and shrink it.

    Scans in the given direction until every pattern character is found,
    then scans back for a shorter span ending at the same place.
    """
    if len(pattern) == 0:
        return MatchResult(0, 0, 0), None
    if ascii_fuzzy_index(text, pattern, case_sensitive) < 0:
        return NO_MATCH, None

    size = len(text)
    plen = len(pattern)
    pidx = 0
    sidx = eidx = -1

    for index in range(size):
        char = _fold(text[_index_at(index, size, forward)], case_sensitive)
        if normalize:
            char = normalize_rune(char)
        if char == pattern[_index_at(pidx, plen, forward)]:
            if sidx < 0:
                sidx = index
            pidx += 1
            if pidx == plen:
                eidx = index + 1
                break

    if sidx < 0 or eidx < 0:
        return NO_MATCH, None

    pidx -= 1
    for index in range(eidx - 1, sidx - 1, -1):
        char = _fold(text[_index_at(index, size, forward)], case_sensitive)
        if char == pattern[_index_at(pidx, plen, forward)]:
            pidx -= 1
            if pidx < 0:
                sidx = index
                break

    if not forward:
        sidx, eidx = size - eidx, size - sidx

    score, positions = calculate_score(
        case_sensitive, normalize, text, pattern, sidx, eidx, with_pos
    )
    return MatchResult(sidx, eidx, score), positions