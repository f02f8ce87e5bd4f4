"""Tests for the relationship rule table."""

import pytest

from keeplayout import MissingTargetError, Priority, Relation, View
from keeplayout.layout.relationships import (
    RELATIONSHIP_RULES,
    Counterpart,
    RelationshipKind as K,
    build_constraint,
    caller_value,
    resolve_counterpart,
    solver_relation,
    solver_terms,
)
from keeplayout.solver import Axis, LayoutAttribute

INVERTED = {
    K.RIGHT_INSET,
    K.BOTTOM_INSET,
    K.RIGHT_OFFSET,
    K.BOTTOM_OFFSET,
    K.RIGHT_ALIGN,
    K.BOTTOM_ALIGN,
    K.HORIZONTAL_ALIGN,
}

NEEDS_TARGET = {
    K.RELATIVE_WIDTH,
    K.RELATIVE_HEIGHT,
    K.LEFT_OFFSET,
    K.RIGHT_OFFSET,
    K.TOP_OFFSET,
    K.BOTTOM_OFFSET,
    K.LEFT_ALIGN,
    K.RIGHT_ALIGN,
    K.TOP_ALIGN,
    K.BOTTOM_ALIGN,
    K.VERTICAL_ALIGN,
    K.HORIZONTAL_ALIGN,
    K.BASELINE_ALIGN,
}


def test_every_kind_has_a_rule():
    assert set(RELATIONSHIP_RULES) == set(K)


@pytest.mark.parametrize("kind", list(K))
def test_inversion_table(kind):
    assert RELATIONSHIP_RULES[kind].invert == (kind in INVERTED)


@pytest.mark.parametrize("kind", list(K))
def test_target_requirement(kind):
    assert RELATIONSHIP_RULES[kind].requires_target == (kind in NEEDS_TARGET)


@pytest.mark.parametrize("kind,axis", [
    (K.WIDTH, Axis.HORIZONTAL),
    (K.HEIGHT, Axis.VERTICAL),
    (K.LEFT_INSET, Axis.HORIZONTAL),
    (K.BOTTOM_OFFSET, Axis.VERTICAL),
    (K.VERTICAL_ALIGN, Axis.HORIZONTAL),
    (K.HORIZONTAL_ALIGN, Axis.VERTICAL),
    (K.BASELINE_ALIGN, Axis.VERTICAL),
])
def test_axis(kind, axis):
    assert RELATIONSHIP_RULES[kind].axis is axis


def test_offsets_relate_opposite_edges():
    assert RELATIONSHIP_RULES[K.LEFT_OFFSET].first_attribute is LayoutAttribute.LEFT
    assert RELATIONSHIP_RULES[K.LEFT_OFFSET].second_attribute is LayoutAttribute.RIGHT
    assert RELATIONSHIP_RULES[K.BOTTOM_OFFSET].first_attribute is LayoutAttribute.BOTTOM
    assert RELATIONSHIP_RULES[K.BOTTOM_OFFSET].second_attribute is LayoutAttribute.TOP


@pytest.mark.parametrize("kind,value,expected", [
    (K.LEFT_INSET, 10, (1.0, 10.0)),
    (K.RIGHT_INSET, 10, (1.0, -10.0)),
    (K.BOTTOM_ALIGN, 4, (1.0, -4.0)),
    (K.BASELINE_ALIGN, 4, (1.0, 4.0)),
    (K.ASPECT_RATIO, 1.5, (1.5, 0.0)),
    (K.RELATIVE_WIDTH, 0.5, (0.5, 0.0)),
    (K.HORIZONTAL_CENTER, 0.25, (0.5, 0.0)),
])
def test_solver_terms(kind, value, expected):
    assert solver_terms(kind, value) == expected


@pytest.mark.parametrize("kind", [K.LEFT_INSET, K.RIGHT_INSET, K.ASPECT_RATIO, K.VERTICAL_CENTER])
def test_caller_value_inverts_solver_terms(kind):
    multiplier, constant = solver_terms(kind, 0.75)
    assert caller_value(kind, multiplier, constant) == pytest.approx(0.75)


def test_explicit_multiplier_for_constant_kinds():
    assert solver_terms(K.LEFT_ALIGN, 3, multiplier=2) == (2.0, 3.0)


@pytest.mark.parametrize("relation,expected", [
    (Relation.EQUAL, Relation.EQUAL),
    (Relation.GREATER_OR_EQUAL, Relation.LESS_OR_EQUAL),
    (Relation.LESS_OR_EQUAL, Relation.GREATER_OR_EQUAL),
])
def test_inverted_kinds_swap_min_and_max(relation, expected):
    assert solver_relation(K.RIGHT_INSET, relation) is expected
    assert solver_relation(K.LEFT_INSET, relation) is relation


def test_resolve_counterpart():
    parent = View("parent")
    child = parent.add_subview(View("child"))
    other = parent.add_subview(View("other"))

    assert resolve_counterpart(K.WIDTH, child, None) is None
    assert resolve_counterpart(K.ASPECT_RATIO, child, None) is child
    assert resolve_counterpart(K.TOP_INSET, child, None) is parent
    assert resolve_counterpart(K.TOP_ALIGN, child, other) is other

    with pytest.raises(MissingTargetError):
        resolve_counterpart(K.TOP_ALIGN, child, None)
    with pytest.raises(MissingTargetError):
        resolve_counterpart(K.TOP_INSET, parent, None)


def test_aspect_ratio_needs_no_target():
    assert RELATIONSHIP_RULES[K.ASPECT_RATIO].counterpart is Counterpart.SELF


def test_build_constraint():
    parent = View("parent")
    child = parent.add_subview(View("child"))
    constraint = build_constraint(
        K.RIGHT_INSET, child, parent, 12, relation=Relation.GREATER_OR_EQUAL, priority=Priority.low()
    )
    assert constraint.first_item is child
    assert constraint.first_attribute is LayoutAttribute.RIGHT
    assert constraint.second_item is parent
    assert constraint.second_attribute is LayoutAttribute.RIGHT
    assert constraint.constant == -12.0
    assert constraint.relation is Relation.LESS_OR_EQUAL
    assert constraint.priority == Priority.low()
    assert not constraint.is_installed


def test_build_dimension_constraint_has_no_second_item():
    view = View("view")
    constraint = build_constraint(K.WIDTH, view, None, 40)
    assert constraint.second_item is None
    assert constraint.second_attribute is None
    assert constraint.constant == 40.0
