import pytest

from fzfcore.latin_table import (
    FIRST_CODE_POINT,
    LAST_CODE_POINT,
    NORMALIZED,
    lowercase_base,
)


@pytest.mark.parametrize(
    "char, expected",
    [
        ("\u00e1", "a"),
        ("\u00e7", "c"),
        ("\u00f3", "o"),
        ("\u00df", "s"),
        ("\u2184", "c"),
        ("\u00c1", "a"),
        ("\u1ec6", "e"),
    ],
)
def test_lowercase_base_of_table_entries(char, expected):
    assert lowercase_base(char) == expected


@pytest.mark.parametrize("char", ["x", "Z", "1", " ", "\u4e2d"])
def test_lowercase_base_without_entry(char):
    assert lowercase_base(char) is None


@pytest.mark.parametrize("text", ["", "ab"])
def test_lowercase_base_rejects_non_single_characters(text):
    with pytest.raises(ValueError):
        lowercase_base(text)


def test_declared_range_edges():
    assert lowercase_base(chr(FIRST_CODE_POINT)) == "a"
    assert lowercase_base(chr(LAST_CODE_POINT)) == "c"
    assert lowercase_base(chr(FIRST_CODE_POINT - 1)) is None
    assert lowercase_base(chr(LAST_CODE_POINT + 1)) is None


def test_all_values_are_ascii_letters():
    bases = {lowercase_base(key) for key in NORMALIZED}
    assert all(len(base) == 1 and base.isascii() and base.isalpha() for base in bases)


def test_lowercase_base_agrees_with_table():
    for key, value in NORMALIZED.items():
        assert lowercase_base(key) == value.lower()


def test_table_is_read_only():
    with pytest.raises(TypeError):
        NORMALIZED["q"] = "q"  # type: ignore[index]
    assert lowercase_base("q") is None