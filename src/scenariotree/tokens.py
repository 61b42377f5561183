"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    STRING = auto()  # any other word (and the file name on line 1)
    TEE = auto()  # ├ (more siblings follow)
    CORNER = auto()  # └ (last sibling)
    WHEN = auto()  # when
    IT = auto()  # it


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based byte offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position (both inclusive)."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token."""

    kind: TokenKind
    lexeme: str
    span: Span


TEE = "\u251c"  # ├
CORNER = "\u2514"  # └
HORIZONTAL = "\u2500"  # ─
VERTICAL = "\u2502"  # │

CONNECTORS: frozenset[TokenKind] = frozenset({TokenKind.TEE, TokenKind.CORNER})

KEYWORDS: dict[str, TokenKind] = {
    "when": TokenKind.WHEN,
    "it": TokenKind.IT,
}

# Drawn lines between connectors and their text carry no meaning
_LINE_GLYPHS = frozenset(HORIZONTAL + VERTICAL)


def is_line_glyph(ch: str) -> bool:
    """Return True if ch is a horizontal or vertical tree line."""
    return ch in _LINE_GLYPHS


def is_box_drawing(ch: str) -> bool:
    """Return True if ch is in the Unicode box-drawing block."""
    return "\u2500" <= ch <= "\u257f"


def utf8_width(ch: str) -> int:
    """Return the number of bytes ch occupies when encoded as UTF-8."""
    return len(ch.encode("utf-8"))
