"""Shared test fixtures."""

from __future__ import annotations

import pytest

from scenariotree.ast import Root
from scenariotree.lexer import tokenize
from scenariotree.parser import parse
from scenariotree.tokens import Token


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns a Root."""

    def _parse(source: str) -> Root:
        return parse(source)

    return _parse
