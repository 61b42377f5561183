"""Scenario tree lexer: converts source text into a flat token stream."""

from __future__ import annotations

from scenariotree.errors import LexError, LexErrorKind
from scenariotree.tokens import (
    CORNER,
    KEYWORDS,
    TEE,
    Position,
    Span,
    Token,
    TokenKind,
    is_box_drawing,
    is_line_glyph,
    utf8_width,
)


class Lexer:
    """Tokenize a scenario tree into a list of Token objects.

    Offsets are UTF-8 byte offsets while columns count characters, so a
    multi-byte glyph such as ``└`` advances the offset by three and the
    column by one. The parser compares columns to decide nesting.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._offset = 0
        self._line = 1
        self._col = 1
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list."""
        self._lex_file_name()

        while self._pos < len(self._source):
            ch = self._peek()

            if ch == "\0":
                raise self._error(LexErrorKind.NUL_CHARACTER)

            if ch.isspace() or is_line_glyph(ch):
                self._advance()
                continue

            if ch == TEE:
                self._lex_connector(TokenKind.TEE)
                continue

            if ch == CORNER:
                self._lex_connector(TokenKind.CORNER)
                continue

            if is_box_drawing(ch):
                raise self._error(LexErrorKind.UNSUPPORTED_GLYPH)

            self._lex_word()

        return self._tokens

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._offset)

    def _peek(self) -> str:
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        self._offset += utf8_width(ch)
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _emit(self, kind: TokenKind, lexeme: str, start: Position, end: Position) -> Token:
        tok = Token(kind, lexeme, Span(start, end))
        self._tokens.append(tok)
        return tok

    def _error(self, kind: LexErrorKind, pos: Position | None = None) -> LexError:
        if pos is None:
            pos = self._current_pos()
        return LexError(kind, Span(pos, pos), self._source)

    # ------------------------------------------------------------------
    # Scanners
    # ------------------------------------------------------------------

    def _lex_file_name(self) -> None:
        """The whole first line, trimmed, is the file name."""
        while self._peek() not in ("", "\n") and self._peek().isspace():
            self._advance()

        start = self._current_pos()
        end: Position | None = None
        chars = []
        while self._peek() not in ("", "\n"):
            ch = self._peek()
            if ch == "\0":
                raise self._error(LexErrorKind.NUL_CHARACTER)
            if not ch.isspace():
                end = self._current_pos()
            chars.append(self._advance())

        if end is None:
            raise self._error(LexErrorKind.FILE_NAME_MISSING, start)

        name = "".join(chars).rstrip()
        self._emit(TokenKind.STRING, name, start, end)

    def _lex_connector(self, kind: TokenKind) -> None:
        pos = self._current_pos()
        ch = self._advance()
        self._emit(kind, ch, pos, pos)

    def _lex_word(self) -> None:
        start = self._current_pos()
        end = start
        chars = []
        while self._pos < len(self._source):
            ch = self._peek()
            if ch.isspace():
                break
            if ch == "\0":
                raise self._error(LexErrorKind.NUL_CHARACTER)
            end = self._current_pos()
            chars.append(self._advance())
        word = "".join(chars)
        self._emit(KEYWORDS.get(word, TokenKind.STRING), word, start, end)


def tokenize(source: str) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source).tokenize()
