"""Common ancestor resolution for pairs of views."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from ..errors import DisconnectedHierarchyError

if TYPE_CHECKING:
    from ..core.view import View
    from ..solver.constraint import LayoutConstraint


def common_superview(first: View, second: View) -> View:
    """Return the nearest view that is an ancestor of (or equal to) both views.

    If one view is an ancestor of the other, that higher view is returned.

    Args:
        first: One view
        second: Another view

    Returns:
        The deepest view present in both ancestor chains

    Raises:
        DisconnectedHierarchyError: If the views are in different trees
    """
    chain = {id(view) for view in first.iter_ancestors()}
    for view in second.iter_ancestors():
        if id(view) in chain:
            return view
    raise DisconnectedHierarchyError(first, second)


def constraint_owner(constraint: LayoutConstraint) -> View:
    """Resolve the view a constraint should be installed on."""
    if constraint.second_item is None:
        return constraint.first_item
    return common_superview(constraint.first_item, constraint.second_item)


def add_constraint_to_common_superview(constraint: LayoutConstraint) -> View:
    """Install a constraint on the common superview of the views it relates.

    Returns:
        The view the constraint was installed on
    """
    owner = constraint_owner(constraint)
    owner.add_constraint(constraint)
    return owner


def remove_constraint_from_common_superview(constraint: LayoutConstraint) -> bool:
    if constraint.owner is None:
        return False
    return constraint.owner.remove_constraint(constraint)


def add_constraints_to_common_superview(constraints: Iterable[LayoutConstraint]) -> None:
    # Resolve every owner before installing anything
    owners = [(constraint_owner(constraint), constraint) for constraint in constraints]
    for owner, constraint in owners:
        owner.add_constraint(constraint)


def remove_constraints_from_common_superview(constraints: Iterable[LayoutConstraint]) -> None:
    for constraint in list(constraints):
        remove_constraint_from_common_superview(constraint)
