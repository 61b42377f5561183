"""--debug AST dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from scenariotree.ast import Action, Condition, Root
from scenariotree.visitor import Visitor


def dump_ast(root: Root, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable AST tree to *file*."""
    root.accept(_Dumper(file))


def _indent(depth: int) -> str:
    return "  " * depth


class _Dumper(Visitor[None]):
    def __init__(self, f: TextIO) -> None:
        self._f = f
        self._depth = 0

    def visit_root(self, root: Root) -> None:
        self._f.write(f"{_indent(self._depth)}Root {root.file_name}\n")
        self._children(root.asts)

    def visit_condition(self, condition: Condition) -> None:
        self._f.write(f"{_indent(self._depth)}Condition {condition.title!r}\n")
        self._children(condition.asts)

    def visit_action(self, action: Action) -> None:
        self._f.write(f"{_indent(self._depth)}Action {action.title!r}\n")

    def _children(self, asts: tuple[Condition | Action, ...]) -> None:
        self._depth += 1
        for child in asts:
            child.accept(self)
        self._depth -= 1
