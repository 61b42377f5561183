"""Scenario tree parser: converts a token stream into an AST."""

from __future__ import annotations

from scenariotree.ast import Action, Condition, Node, Root
from scenariotree.errors import ParseError, ParseErrorKind
from scenariotree.lexer import tokenize
from scenariotree.tokens import CONNECTORS, Position, Span, Token, TokenKind


class Parser:
    """Recursive descent parser for scenario tree token streams.

    Nesting is decided by indentation alone: a condition's children are the
    nodes that follow it and start at a greater column than its connector.

    A Parser can be reused for any number of parses, one at a time.
    """

    def __init__(self) -> None:
        self._source = ""
        self._tokens: list[Token] = []
        self._current = 0

    def parse(self, source: str, tokens: list[Token]) -> Root:
        """Parse ``tokens`` lexed from ``source`` into a Root node."""
        self._source = source
        self._tokens = tokens
        self._current = 0

        tok = self._peek()
        if tok is None:
            raise self._eof()
        if tok.kind != TokenKind.STRING:
            raise self._unexpected(tok)
        return self._parse_root(tok)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self) -> Token | None:
        if self._current < len(self._tokens):
            return self._tokens[self._current]
        return None

    def _previous(self) -> Token:
        """The most recently consumed token."""
        return self._tokens[self._current - 1]

    def _advance(self) -> Token | None:
        """Consume the current token and return the one after it."""
        if self._current < len(self._tokens):
            self._current += 1
        return self._peek()

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def _parse_root(self, name_tok: Token) -> Root:
        self._advance()

        asts: list[Node] = []
        while self._peek() is not None:
            asts.append(self._parse_node())

        end = asts[-1].span.end if asts else name_tok.span.end
        return Root(name_tok.lexeme, tuple(asts), Span(name_tok.span.start, end))

    def _parse_node(self) -> Node:
        connector = self._peek()
        if connector is None:
            raise self._eof()
        if connector.kind not in CONNECTORS:
            raise self._unexpected(connector)

        keyword = self._advance()
        if keyword is None:
            raise self._eof()

        if keyword.kind == TokenKind.IT:
            title = self._parse_title(keyword)
            return Action(title, Span(connector.span.start, self._previous().span.end))

        if keyword.kind == TokenKind.WHEN:
            title = self._parse_title(keyword)

            # Only tokens indented past this connector belong to this branch
            column = connector.span.start.column
            asts: list[Node] = []
            while (tok := self._peek()) is not None and tok.span.start.column > column:
                asts.append(self._parse_node())

            return Condition(
                title, tuple(asts), Span(connector.span.start, self._previous().span.end)
            )

        raise self._error(ParseErrorKind.UNEXPECTED_TOKEN, connector.span)

    def _parse_title(self, keyword: Token) -> str:
        """Join the keyword and the words after it, up to the next connector."""
        words = [keyword.lexeme]
        tok = self._advance()
        while tok is not None and tok.kind in _WORD_KINDS:
            words.append(tok.lexeme)
            tok = self._advance()
        return " ".join(words)

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def _unexpected(self, tok: Token) -> ParseError:
        return self._error(_UNEXPECTED.get(tok.kind, ParseErrorKind.UNEXPECTED_TOKEN), tok.span)

    def _eof(self) -> ParseError:
        if self._tokens:
            span = self._tokens[-1].span
        else:
            span = Span(_START, _START)
        return self._error(ParseErrorKind.UNEXPECTED_EOF, span)

    def _error(self, kind: ParseErrorKind, span: Span) -> ParseError:
        return ParseError(kind, span, self._source)


# Module-level constants
_START = Position(1, 1, 0)
_WORD_KINDS: frozenset[TokenKind] = frozenset({TokenKind.STRING, TokenKind.WHEN, TokenKind.IT})
_UNEXPECTED: dict[TokenKind, ParseErrorKind] = {
    TokenKind.STRING: ParseErrorKind.UNEXPECTED_STRING,
    TokenKind.WHEN: ParseErrorKind.UNEXPECTED_WHEN,
    TokenKind.IT: ParseErrorKind.UNEXPECTED_IT,
}


def parse(source: str) -> Root:
    """Convenience function: parse source text and return a Root AST."""
    tokens = tokenize(source)
    return Parser().parse(source, tokens)
