"""Folding of accented and variant Latin letters to their plain base letters."""

from __future__ import annotations

from typing import Iterable, overload

from fzfcore.latin_table import FIRST_CODE_POINT, LAST_CODE_POINT, NORMALIZED


def normalize_rune(char: str) -> str:
    """Return the plain base letter of ``char``, or ``char`` itself.

    Case is preserved: an accented capital folds to an ASCII capital.
    """
    code_point = ord(char)
    if code_point < FIRST_CODE_POINT or code_point > LAST_CODE_POINT:
        return char
    return NORMALIZED.get(char, char)


@overload
def normalize_runes(text: str) -> str: ...


@overload
def normalize_runes(text: Iterable[str]) -> list[str]: ...


def normalize_runes(text):
    """Fold every character of ``text`` with :func:`normalize_rune`.

    A string gives back a new string; any other iterable of characters
    gives back a new list. The input is never modified.
    """
    if isinstance(text, str):
        return "".join(normalize_rune(char) for char in text)
    return [normalize_rune(char) for char in text]