"""Scenario tree front end: lexer, parser, AST, and modifier discovery."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scenariotree.ast import Root

__version__ = "0.1.0"


def analyze(source: str) -> tuple[Root, dict[str, str]]:
    """Parse a scenario tree and discover its modifiers."""
    from scenariotree.modifiers import ModifierDiscoverer
    from scenariotree.parser import parse

    root = parse(source)
    return root, ModifierDiscoverer().discover(root)
