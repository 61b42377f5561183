"""Identifier helpers for condition titles."""

from __future__ import annotations


def capitalize_first_letter(word: str) -> str:
    """Upper-case the first character of word, leaving the rest unchanged."""
    return word[:1].upper() + word[1:]


def to_modifier(title: str) -> str:
    """Convert a condition title to a camelCase modifier name.

    ``"when only owner"`` becomes ``"whenOnlyOwner"``. The first word is kept
    as written; an empty title gives an empty name.
    """
    words = title.split()
    if not words:
        return ""
    return words[0] + "".join(capitalize_first_letter(w) for w in words[1:])
