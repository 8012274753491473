"""Optimal fuzzy matching and the exact, prefix, suffix and equal matchers.

All functions take the text as a string and the pattern as a sequence of
characters. The pattern must already be lower-case for case-insensitive
matching and already normalized when ``normalize`` is set. Each returns a
:class:`MatchResult` and, where requested and supported, the matched
character positions.
"""

from __future__ import annotations

from typing import Optional, Sequence

from fzfcore.algo_core import (
    BONUS_BOUNDARY,
    BONUS_CONSECUTIVE,
    BONUS_FIRST_CHAR_MULTIPLIER,
    NO_MATCH,
    SCHEME,
    SCORE_GAP_EXTENSION,
    SCORE_GAP_START,
    SCORE_MATCH,
    CharClass,
    MatchResult,
    ascii_fuzzy_index,
    bonus_at,
    bonus_for,
    calculate_score,
    char_class_of,
    fuzzy_match_v1,
)
from fzfcore.constants import SLAB16_SIZE
from fzfcore.normalize import normalize_rune

Positions = Optional[list[int]]

# Characters that str.isspace() accepts but which are not white space
# in the Unicode sense used for trimming.
_NOT_SPACE = frozenset("\x1c\x1d\x1e\x1f")


def _is_space(char: str) -> bool:
    return char.isspace() and char not in _NOT_SPACE


def _lower(char: str) -> str:
    lowered = char.lower()
    return lowered[0] if lowered else char


def _fold(char: str, case_sensitive: bool) -> str:
    if not case_sensitive:
        if "A" <= char <= "Z":
            return chr(ord(char) + 32)
        if ord(char) > 0x7F:
            return _lower(char)
    return char


def _index_at(index: int, size: int, forward: bool) -> int:
    return index if forward else size - index - 1


def _leading_whitespaces(text: str) -> int:
    return len(text) - len(text.lstrip("".join(c for c in text if _is_space(c))))


def _count_leading_spaces(text: str) -> int:
    count = 0
    for char in text:
        if not _is_space(char):
            break
        count += 1
    return count


def _count_trailing_spaces(text: str) -> int:
    count = 0
    for char in reversed(text):
        if not _is_space(char):
            break
        count += 1
    return count


def fuzzy_match_v2(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: Sequence[str],
    with_pos: bool = False,
) -> tuple[MatchResult, Positions]:
    """Find the highest-scoring fuzzy occurrence of ``pattern`` in ``text``.

    A modified Smith-Waterman alignment in which no pattern character may
    be skipped. Inputs too large for the score matrix fall back to
    :func:`fzfcore.algo_core.fuzzy_match_v1`.
    """
    m = len(pattern)
    if m == 0:
        return MatchResult(0, 0, 0), ([] if with_pos else None)
    n = len(text)

    if n * m > SLAB16_SIZE:
        return fuzzy_match_v1(case_sensitive, normalize, forward, text, pattern, with_pos)

    # Phase 1: quick rejection and the starting point for ASCII text.
    start = ascii_fuzzy_index(text, pattern, case_sensitive)
    if start < 0:
        return NO_MATCH, None

    h0 = [0] * n
    c0 = [0] * n
    bonuses = [0] * n
    first = [0] * m
    chars = list(text)

    # Phase 2: bonus for each position and the first row of the matrix.
    max_score = max_score_pos = 0
    pidx = last_idx = 0
    pchar0 = pchar = pattern[0]
    prev_h0 = 0
    prev_class = SCHEME.initial_char_class
    in_gap = False
    for col in range(start, n):
        char = chars[col]
        cls = char_class_of(char)
        if ord(char) <= 0x7F:
            if not case_sensitive and cls == CharClass.UPPER:
                char = chr(ord(char) + 32)
        else:
            if not case_sensitive and cls == CharClass.UPPER:
                char = _lower(char)
            if normalize:
                char = normalize_rune(char)

        chars[col] = char
        bonus = bonus_for(prev_class, cls)
        bonuses[col] = bonus
        prev_class = cls

        if char == pchar:
            if pidx < m:
                first[pidx] = col
                pidx += 1
                pchar = pattern[min(pidx, m - 1)]
            last_idx = col

        if char == pchar0:
            score = SCORE_MATCH + bonus * BONUS_FIRST_CHAR_MULTIPLIER
            h0[col] = score
            c0[col] = 1
            if m == 1 and (
                (forward and score > max_score) or (not forward and score >= max_score)
            ):
                max_score, max_score_pos = score, col
                if forward and bonus >= BONUS_BOUNDARY:
                    break
            in_gap = False
        else:
            penalty = SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START
            h0[col] = max(prev_h0 + penalty, 0)
            c0[col] = 0
            in_gap = True
        prev_h0 = h0[col]

    if pidx != m:
        return NO_MATCH, None
    if m == 1:
        result = MatchResult(max_score_pos, max_score_pos + 1, max_score)
        return result, ([max_score_pos] if with_pos else None)

    # Phase 3: fill in the score matrix H and the consecutive-length matrix C.
    f0 = first[0]
    width = last_idx - f0 + 1
    h = [0] * (width * m)
    h[:width] = h0[f0:last_idx + 1]
    c = [0] * (width * m)
    c[:width] = c0[f0:last_idx + 1]

    for pidx in range(1, m):
        f = first[pidx]
        pchar = pattern[pidx]
        row = pidx * width
        in_gap = False
        h[row + f - f0 - 1] = 0
        for col in range(f, last_idx + 1):
            j0 = col - f0
            s2 = h[row + j0 - 1] + (SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START)
            s1 = 0
            consecutive = 0
            if pchar == chars[col]:
                diag = row - width + j0 - 1
                s1 = h[diag] + SCORE_MATCH
                b = bonuses[col]
                consecutive = c[diag] + 1
                if consecutive > 1:
                    fb = bonuses[col - consecutive + 1]
                    # A stronger boundary breaks the consecutive chunk.
                    if b >= BONUS_BOUNDARY and b > fb:
                        consecutive = 1
                    else:
                        b = max(b, BONUS_CONSECUTIVE, fb)
                if s1 + b < s2:
                    s1 += bonuses[col]
                    consecutive = 0
                else:
                    s1 += b
            c[row + j0] = consecutive

            in_gap = s1 < s2
            score = max(s1, s2, 0)
            if pidx == m - 1 and (
                (forward and score > max_score) or (not forward and score >= max_score)
            ):
                max_score, max_score_pos = score, col
            h[row + j0] = score

    # Phase 4: backtrace for the character positions.
    positions: Positions = [] if with_pos else None
    j = f0
    if positions is not None:
        i = m - 1
        j = max_score_pos
        prefer_match = True
        while True:
            base = i * width
            j0 = j - f0
            s = h[base + j0]
            s1 = h[base - width + j0 - 1] if i > 0 and j >= first[i] else 0
            s2 = h[base + j0 - 1] if j > first[i] else 0

            if s > s1 and (s > s2 or (s == s2 and prefer_match)):
                positions.append(j)
                if i == 0:
                    break
                i -= 1
            below = base + width + j0 + 1
            prefer_match = c[base + j0] > 1 or (below < len(c) and c[below] > 0)
            j -= 1

    # The start offset is only exact when positions were traced.
    return MatchResult(j, max_score_pos + 1, max_score), positions


def exact_match_naive(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: Sequence[str],
    with_pos: bool = False,
) -> tuple[MatchResult, Positions]:
    """Find the occurrence of ``pattern`` as a substring with the best bonus.

    Only the bonus at the first pattern character is compared; the search
    stops at the first occurrence starting on a word boundary.
    """
    if len(pattern) == 0:
        return MatchResult(0, 0, 0), None

    n = len(text)
    plen = len(pattern)
    if n < plen:
        return NO_MATCH, None
    if ascii_fuzzy_index(text, pattern, case_sensitive) < 0:
        return NO_MATCH, None

    pidx = 0
    best_pos, bonus, best_bonus = -1, 0, -1
    index = 0
    while index < n:
        text_idx = _index_at(index, n, forward)
        char = _fold(text[text_idx], case_sensitive)
        if normalize:
            char = normalize_rune(char)
        pattern_idx = _index_at(pidx, plen, forward)
        if pattern[pattern_idx] == char:
            if pattern_idx == 0:
                bonus = bonus_at(text, text_idx)
            pidx += 1
            if pidx == plen:
                if bonus > best_bonus:
                    best_pos, best_bonus = index, bonus
                if bonus >= BONUS_BOUNDARY:
                    break
                index -= pidx - 1
                pidx, bonus = 0, 0
        else:
            index -= pidx
            pidx, bonus = 0, 0
        index += 1

    if best_pos < 0:
        return NO_MATCH, None
    if forward:
        sidx = best_pos - plen + 1
        eidx = best_pos + 1
    else:
        sidx = n - (best_pos + 1)
        eidx = n - (best_pos - plen + 1)
    score, _ = calculate_score(case_sensitive, normalize, text, pattern, sidx, eidx, False)
    return MatchResult(sidx, eidx, score), None


def prefix_match(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: Sequence[str],
    with_pos: bool = False,
) -> tuple[MatchResult, Positions]:
    """Match ``pattern`` at the start of ``text``.

    Leading white space in the text is skipped unless the pattern itself
    starts with white space.
    """
    if len(pattern) == 0:
        return MatchResult(0, 0, 0), None

    trimmed = 0 if _is_space(pattern[0]) else _count_leading_spaces(text)
    plen = len(pattern)
    if len(text) - trimmed < plen:
        return NO_MATCH, None

    for offset, expected in enumerate(pattern):
        char = text[trimmed + offset]
        if not case_sensitive:
            char = _lower(char)
        if normalize:
            char = normalize_rune(char)
        if char != expected:
            return NO_MATCH, None

    score, _ = calculate_score(
        case_sensitive, normalize, text, pattern, trimmed, trimmed + plen, False
    )
    return MatchResult(trimmed, trimmed + plen, score), None


def suffix_match(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: Sequence[str],
    with_pos: bool = False,
) -> tuple[MatchResult, Positions]:
    """Match ``pattern`` at the end of ``text``.

    Trailing white space in the text is skipped unless the pattern itself
    ends with white space.
    """
    trimmed = len(text)
    if len(pattern) == 0 or not _is_space(pattern[-1]):
        trimmed -= _count_trailing_spaces(text)
    if len(pattern) == 0:
        return MatchResult(trimmed, trimmed, 0), None

    plen = len(pattern)
    diff = trimmed - plen
    if diff < 0:
        return NO_MATCH, None

    for offset, expected in enumerate(pattern):
        char = text[diff + offset]
        if not case_sensitive:
            char = _lower(char)
        if normalize:
            char = normalize_rune(char)
        if char != expected:
            return NO_MATCH, None

    score, _ = calculate_score(case_sensitive, normalize, text, pattern, diff, trimmed, False)
    return MatchResult(diff, trimmed, score), None


def equal_match(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: Sequence[str],
    with_pos: bool = False,
) -> tuple[MatchResult, Positions]:
    """Match when ``text``, trimmed of surrounding white space, equals ``pattern``.

    White space is trimmed only on the sides where the pattern has none.
    An empty pattern never matches.
    """
    plen = len(pattern)
    if plen == 0:
        return NO_MATCH, None

    trimmed = 0 if _is_space(pattern[0]) else _count_leading_spaces(text)
    trimmed_end = 0 if _is_space(pattern[-1]) else _count_trailing_spaces(text)
    if len(text) - trimmed - trimmed_end != plen:
        return NO_MATCH, None

    segment = text[trimmed:trimmed + plen]
    if normalize:
        matched = all(
            normalize_rune(expected)
            == normalize_rune(char if case_sensitive else _lower(char))
            for expected, char in zip(pattern, segment)
        )
    else:
        if not case_sensitive:
            segment = segment.lower()
        matched = segment == "".join(pattern)

    if not matched:
        return NO_MATCH, None
    white = SCHEME.bonus_boundary_white
    score = (SCORE_MATCH + white) * plen + (BONUS_FIRST_CHAR_MULTIPLIER - 1) * white
    return MatchResult(trimmed, trimmed + plen, score), None