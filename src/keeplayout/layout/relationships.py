"""Relationship kinds and the fixed table that compiles them to constraints.

Each kind declares once which attributes it relates, which view it is
measured against, whether the caller's value is a constant or a multiplier,
and whether the value is inverted. Inverted kinds (trailing and bottom edges)
let callers always use "positive means inward/forward":

    right inset 10  ->  view.right == superview.right - 10
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..core.priority import Priority
from ..errors import MissingTargetError
from ..solver.constraint import Axis, LayoutAttribute, LayoutConstraint, Relation

if TYPE_CHECKING:
    from ..core.view import View


class RelationshipKind(Enum):
    # Dimensions
    WIDTH = "width"
    HEIGHT = "height"
    ASPECT_RATIO = "aspect_ratio"
    RELATIVE_WIDTH = "relative_width"
    RELATIVE_HEIGHT = "relative_height"

    # Superview insets
    LEFT_INSET = "left_inset"
    RIGHT_INSET = "right_inset"
    TOP_INSET = "top_inset"
    BOTTOM_INSET = "bottom_inset"

    # Position within superview, as a fraction of its size
    HORIZONTAL_CENTER = "horizontal_center"
    VERTICAL_CENTER = "vertical_center"

    # Spacing between two views
    LEFT_OFFSET = "left_offset"
    RIGHT_OFFSET = "right_offset"
    TOP_OFFSET = "top_offset"
    BOTTOM_OFFSET = "bottom_offset"

    # Alignment of two views
    LEFT_ALIGN = "left_align"
    RIGHT_ALIGN = "right_align"
    TOP_ALIGN = "top_align"
    BOTTOM_ALIGN = "bottom_align"
    VERTICAL_ALIGN = "vertical_align"
    HORIZONTAL_ALIGN = "horizontal_align"
    BASELINE_ALIGN = "baseline_align"


class Counterpart(Enum):
    """What the second item of the compiled constraint is."""

    NONE = "none"
    SELF = "self"
    SUPERVIEW = "superview"
    TARGET = "target"


class ValueRole(Enum):
    """How the caller's value enters the constraint."""

    CONSTANT = "constant"
    MULTIPLIER = "multiplier"
    # 0 = leading edge, 1 = trailing edge; becomes multiplier 2 * value on a center
    FRACTION = "fraction"


@dataclass(frozen=True)
class RelationshipRule:
    first_attribute: LayoutAttribute
    second_attribute: LayoutAttribute | None
    counterpart: Counterpart
    invert: bool = False
    value_role: ValueRole = ValueRole.CONSTANT
    default_value: float = 0.0

    @property
    def axis(self) -> Axis:
        return self.first_attribute.axis

    @property
    def requires_target(self) -> bool:
        return self.counterpart is Counterpart.TARGET

    @property
    def sign(self) -> float:
        return -1.0 if self.invert else 1.0


L = LayoutAttribute
K = RelationshipKind

RELATIONSHIP_RULES: dict[RelationshipKind, RelationshipRule] = {
    K.WIDTH: RelationshipRule(L.WIDTH, None, Counterpart.NONE),
    K.HEIGHT: RelationshipRule(L.HEIGHT, None, Counterpart.NONE),
    K.ASPECT_RATIO: RelationshipRule(
        L.WIDTH, L.HEIGHT, Counterpart.SELF, value_role=ValueRole.MULTIPLIER, default_value=1.0
    ),
    K.RELATIVE_WIDTH: RelationshipRule(
        L.WIDTH, L.WIDTH, Counterpart.TARGET, value_role=ValueRole.MULTIPLIER, default_value=1.0
    ),
    K.RELATIVE_HEIGHT: RelationshipRule(
        L.HEIGHT, L.HEIGHT, Counterpart.TARGET, value_role=ValueRole.MULTIPLIER, default_value=1.0
    ),

    K.LEFT_INSET: RelationshipRule(L.LEFT, L.LEFT, Counterpart.SUPERVIEW),
    K.RIGHT_INSET: RelationshipRule(L.RIGHT, L.RIGHT, Counterpart.SUPERVIEW, invert=True),
    K.TOP_INSET: RelationshipRule(L.TOP, L.TOP, Counterpart.SUPERVIEW),
    K.BOTTOM_INSET: RelationshipRule(L.BOTTOM, L.BOTTOM, Counterpart.SUPERVIEW, invert=True),

    K.HORIZONTAL_CENTER: RelationshipRule(
        L.CENTER_X, L.CENTER_X, Counterpart.SUPERVIEW, value_role=ValueRole.FRACTION, default_value=0.5
    ),
    K.VERTICAL_CENTER: RelationshipRule(
        L.CENTER_Y, L.CENTER_Y, Counterpart.SUPERVIEW, value_role=ValueRole.FRACTION, default_value=0.5
    ),

    # Offsets place the view after (or before) the target along an axis
    K.LEFT_OFFSET: RelationshipRule(L.LEFT, L.RIGHT, Counterpart.TARGET),
    K.RIGHT_OFFSET: RelationshipRule(L.RIGHT, L.LEFT, Counterpart.TARGET, invert=True),
    K.TOP_OFFSET: RelationshipRule(L.TOP, L.BOTTOM, Counterpart.TARGET),
    K.BOTTOM_OFFSET: RelationshipRule(L.BOTTOM, L.TOP, Counterpart.TARGET, invert=True),

    K.LEFT_ALIGN: RelationshipRule(L.LEFT, L.LEFT, Counterpart.TARGET),
    K.RIGHT_ALIGN: RelationshipRule(L.RIGHT, L.RIGHT, Counterpart.TARGET, invert=True),
    K.TOP_ALIGN: RelationshipRule(L.TOP, L.TOP, Counterpart.TARGET),
    K.BOTTOM_ALIGN: RelationshipRule(L.BOTTOM, L.BOTTOM, Counterpart.TARGET, invert=True),
    # Vertical align shares the vertical center line (x axis)
    K.VERTICAL_ALIGN: RelationshipRule(L.CENTER_X, L.CENTER_X, Counterpart.TARGET),
    K.HORIZONTAL_ALIGN: RelationshipRule(L.CENTER_Y, L.CENTER_Y, Counterpart.TARGET, invert=True),
    K.BASELINE_ALIGN: RelationshipRule(L.BASELINE, L.BASELINE, Counterpart.TARGET),
}

del L, K


def rule_for(kind: RelationshipKind | str) -> RelationshipRule:
    """Look up the rule of a kind (or of its name)."""
    return RELATIONSHIP_RULES[RelationshipKind(kind)]


def resolve_counterpart(kind: RelationshipKind, view: View, target: View | None) -> View | None:
    """Return the second view of the relationship.

    Raises:
        MissingTargetError: If the kind needs a target (or superview) that is absent
    """
    rule = RELATIONSHIP_RULES[kind]
    if rule.counterpart is Counterpart.NONE:
        return None
    if rule.counterpart is Counterpart.SELF:
        return view
    if rule.counterpart is Counterpart.SUPERVIEW:
        if view.superview is None:
            raise MissingTargetError(f"{kind.value} of {view.name!r} requires a superview")
        return view.superview
    if target is None:
        raise MissingTargetError(f"{kind.value} of {view.name!r} requires a target view")
    return target


def solver_terms(
    kind: RelationshipKind, value: float, multiplier: float | None = None
) -> tuple[float, float]:
    """Translate a caller-visible value into (multiplier, constant).

    Args:
        kind: Relationship kind
        value: Value as the caller sees it
        multiplier: Explicit multiplier for constant-valued kinds

    Returns:
        Tuple of (multiplier, constant) for the solver constraint
    """
    rule = RELATIONSHIP_RULES[kind]
    if rule.value_role is ValueRole.MULTIPLIER:
        return float(value), 0.0
    if rule.value_role is ValueRole.FRACTION:
        return 2.0 * float(value), 0.0
    return (1.0 if multiplier is None else float(multiplier)), rule.sign * float(value)


def solver_relation(kind: RelationshipKind, relation: Relation) -> Relation:
    """Relation as applied by the solver; inverted kinds swap min and max."""
    if not RELATIONSHIP_RULES[kind].invert or relation is Relation.EQUAL:
        return relation
    if relation is Relation.GREATER_OR_EQUAL:
        return Relation.LESS_OR_EQUAL
    return Relation.GREATER_OR_EQUAL


def build_constraint(
    kind: RelationshipKind,
    view: View,
    counterpart: View | None,
    value: float,
    relation: Relation = Relation.EQUAL,
    priority: Priority | None = None,
    multiplier: float | None = None,
) -> LayoutConstraint:
    """Compile one relationship into a solver constraint (not installed)."""
    rule = RELATIONSHIP_RULES[kind]
    solved_multiplier, constant = solver_terms(kind, value, multiplier)
    return LayoutConstraint(
        first_item=view,
        first_attribute=rule.first_attribute,
        relation=solver_relation(kind, relation),
        second_item=counterpart,
        second_attribute=rule.second_attribute if counterpart is not None else None,
        multiplier=solved_multiplier,
        constant=constant,
        priority=priority,
    )


def caller_value(kind: RelationshipKind, multiplier: float, constant: float) -> float:
    """Inverse of solver_terms: the value a caller would have set."""
    rule = RELATIONSHIP_RULES[kind]
    if rule.value_role is ValueRole.MULTIPLIER:
        return multiplier
    if rule.value_role is ValueRole.FRACTION:
        return multiplier / 2.0
    return rule.sign * constant
