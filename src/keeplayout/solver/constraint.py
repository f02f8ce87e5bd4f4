"""Linear constraint objects consumed by the layout solver.

A constraint has the form::

    first_item.first_attribute  (relation)  multiplier * second_item.second_attribute + constant

and is installed on a single owning view. Position attributes are measured in
the owning view's coordinate space.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from ..core.priority import Priority

if TYPE_CHECKING:
    from ..core.view import View


class Axis(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class LayoutAttribute(Enum):
    """Geometric quantities of a view that constraints can relate."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"
    WIDTH = "width"
    HEIGHT = "height"
    CENTER_X = "center_x"
    CENTER_Y = "center_y"
    BASELINE = "baseline"

    @property
    def axis(self) -> Axis:
        if self in _HORIZONTAL_ATTRIBUTES:
            return Axis.HORIZONTAL
        return Axis.VERTICAL

    @property
    def is_dimension(self) -> bool:
        return self in (LayoutAttribute.WIDTH, LayoutAttribute.HEIGHT)


_HORIZONTAL_ATTRIBUTES = frozenset({
    LayoutAttribute.LEFT,
    LayoutAttribute.RIGHT,
    LayoutAttribute.WIDTH,
    LayoutAttribute.CENTER_X,
})


class Relation(Enum):
    EQUAL = "=="
    GREATER_OR_EQUAL = ">="
    LESS_OR_EQUAL = "<="

    @classmethod
    def parse(cls, name: Relation | str) -> Relation:
        """Accept a Relation, its symbol, or one of equal/min/max."""
        if isinstance(name, Relation):
            return name
        text = str(name).strip().lower()
        if text in _RELATION_ALIASES:
            return _RELATION_ALIASES[text]
        for relation in cls:
            if relation.value == text:
                return relation
        raise ValueError(f"Unknown relation {name!r}, expected equal, min or max")


_RELATION_ALIASES = {
    "equal": Relation.EQUAL,
    "min": Relation.GREATER_OR_EQUAL,
    "max": Relation.LESS_OR_EQUAL,
}


class LayoutConstraint:
    """A single linear relationship between one or two view attributes.

    Constant, multiplier and priority may be changed in place; the owning view
    is flagged for layout whenever they change.
    """

    def __init__(
        self,
        first_item: View,
        first_attribute: LayoutAttribute,
        relation: Relation = Relation.EQUAL,
        second_item: View | None = None,
        second_attribute: LayoutAttribute | None = None,
        multiplier: float = 1.0,
        constant: float = 0.0,
        priority: Priority | None = None,
    ) -> None:
        if (second_item is None) != (second_attribute is None):
            raise ValueError("second_item and second_attribute must be given together")
        self.first_item = first_item
        self.first_attribute = first_attribute
        self.relation = relation
        self.second_item = second_item
        self.second_attribute = second_attribute
        self._multiplier = float(multiplier)
        self._constant = float(constant)
        self._priority = priority or Priority.required()
        # View this constraint is installed on, None while not installed
        self.owner: View | None = None

    @property
    def constant(self) -> float:
        return self._constant

    @constant.setter
    def constant(self, value: float) -> None:
        self._constant = float(value)
        self._invalidate()

    @property
    def multiplier(self) -> float:
        return self._multiplier

    @multiplier.setter
    def multiplier(self, value: float) -> None:
        self._multiplier = float(value)
        self._invalidate()

    @property
    def priority(self) -> Priority:
        return self._priority

    @priority.setter
    def priority(self, value: Priority) -> None:
        self._priority = value
        self._invalidate()

    @property
    def is_installed(self) -> bool:
        return self.owner is not None

    def items(self) -> tuple[View, ...]:
        """Views referenced by this constraint."""
        if self.second_item is None:
            return (self.first_item,)
        return (self.first_item, self.second_item)

    def _invalidate(self) -> None:
        if self.owner is not None:
            self.owner.set_needs_layout()

    def __repr__(self) -> str:
        lhs = f"{self.first_item.name}.{self.first_attribute.value}"
        if self.second_item is None:
            rhs = f"{self._constant:g}"
        else:
            rhs = f"{self._multiplier:g} * {self.second_item.name}.{self.second_attribute.value}"
            if self._constant:
                rhs += f" {'+' if self._constant > 0 else '-'} {abs(self._constant):g}"
        return f"<LayoutConstraint {lhs} {self.relation.value} {rhs} @{self._priority.value:g}>"
