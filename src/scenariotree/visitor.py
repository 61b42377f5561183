"""Visitor protocol for walking scenario tree ASTs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from scenariotree.ast import Action, Condition, Root

T = TypeVar("T")


class Visitor(ABC, Generic[T]):
    """One operation per AST node type.

    Nodes call back into the matching method from ``accept``. Visitors do not
    recurse automatically: ``visit_root`` is the entry point and each concrete
    visitor decides which children to visit, by calling ``child.accept(self)``.
    Failures are raised and propagate to whoever started the walk.
    """

    @abstractmethod
    def visit_root(self, root: Root) -> T: ...

    @abstractmethod
    def visit_condition(self, condition: Condition) -> T: ...

    @abstractmethod
    def visit_action(self, action: Action) -> T: ...
