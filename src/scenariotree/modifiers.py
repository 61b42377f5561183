"""Modifier discovery: map top-level condition titles to identifiers."""

from __future__ import annotations

from scenariotree.ast import Action, Condition, Root
from scenariotree.strings import to_modifier
from scenariotree.visitor import Visitor


class ModifierDiscoverer(Visitor[None]):
    """Collect the modifiers a code generator needs for a tree.

    Only the conditions directly under the root become modifiers; conditions
    nested inside them are not visited. Titles are keys, so a title that
    appears twice yields a single entry. Entries keep source order.
    """

    def __init__(self) -> None:
        self._modifiers: dict[str, str] = {}

    def discover(self, root: Root) -> dict[str, str]:
        """Visit ``root`` and return a copy of the title -> modifier mapping."""
        root.accept(self)
        return dict(self._modifiers)

    def visit_root(self, root: Root) -> None:
        for node in root.asts:
            if isinstance(node, Condition):
                node.accept(self)

    def visit_condition(self, condition: Condition) -> None:
        self._modifiers[condition.title] = to_modifier(condition.title)

    def visit_action(self, action: Action) -> None:
        pass
