"""Error types with formatted source context."""

from __future__ import annotations

from enum import Enum

from scenariotree.tokens import Span


class LexErrorKind(Enum):
    """What went wrong while tokenizing. More kinds may be added."""

    FILE_NAME_MISSING = "missing file name on the first line"
    NUL_CHARACTER = "NUL character in source"
    UNSUPPORTED_GLYPH = "unsupported tree-drawing character"

    def __str__(self) -> str:
        return self.value


class ParseErrorKind(Enum):
    """What went wrong while building the tree. More kinds may be added."""

    UNEXPECTED_TOKEN = "unexpected token"
    UNEXPECTED_WHEN = "unexpected WHEN keyword"
    UNEXPECTED_IT = "unexpected IT keyword"
    UNEXPECTED_STRING = "unexpected STRING"
    UNEXPECTED_EOF = "unexpected end of file"

    def __str__(self) -> str:
        return self.value


class ScenarioTreeError(Exception):
    """Base class for errors that point at a span of the source text."""

    def __init__(self, kind: LexErrorKind | ParseErrorKind, span: Span, source: str) -> None:
        self.kind = kind
        self.message = str(kind)
        self.span = span
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "input.tree") -> str:
        # Only \n ends a line, matching the lexer's line numbering
        lines = self.source.split("\n")
        line_idx = self.span.start.line - 1
        col = self.span.start.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\r")
        else:
            source_line = ""

        # Spans are inclusive; underline the full span when on one line
        if self.span.end.line == self.span.start.line:
            underline_len = max(1, self.span.end.column - col + 1)
        else:
            underline_len = max(1, len(source_line) - col + 1)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.span.start.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.span.start.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class LexError(ScenarioTreeError):
    """Raised on the first lexing error, with span and source context."""

    kind: LexErrorKind


class ParseError(ScenarioTreeError):
    """Raised on the first parse error, with span and source context."""

    kind: ParseErrorKind
