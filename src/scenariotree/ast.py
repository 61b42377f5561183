"""AST node types for parsed scenario trees."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from scenariotree.tokens import Span

if TYPE_CHECKING:
    from scenariotree.visitor import Visitor

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Action:
    """An ``it ...`` leaf: an expected outcome."""

    title: str
    span: Span

    def accept(self, visitor: Visitor[T]) -> T:
        return visitor.visit_action(self)


@dataclass(frozen=True, slots=True)
class Condition:
    """A ``when ...`` branch with nested conditions and actions."""

    title: str
    asts: tuple[Condition | Action, ...]
    span: Span

    def accept(self, visitor: Visitor[T]) -> T:
        return visitor.visit_condition(self)


@dataclass(frozen=True, slots=True)
class Root:
    """Root node: the file name from the first line and the top-level branches."""

    file_name: str
    asts: tuple[Condition | Action, ...]
    span: Span

    def accept(self, visitor: Visitor[T]) -> T:
        return visitor.visit_root(self)


Node = Condition | Action
Ast = Root | Condition | Action
