"""Attribute handles binding one keep relationship to one solver constraint."""

from __future__ import annotations

import logging
import weakref
from typing import TYPE_CHECKING

from ..core.priority import Priority
from ..solver.constraint import LayoutConstraint, Relation
from .ancestors import common_superview
from .relationships import (
    RELATIONSHIP_RULES,
    RelationshipKind,
    ValueRole,
    build_constraint,
    caller_value,
    resolve_counterpart,
    solver_terms,
)

if TYPE_CHECKING:
    from ..core.view import View

logger = logging.getLogger(__name__)

# (owning ancestor, counterpart view or None)
Placement = tuple["View", "View | None"]


class KeepAttribute:
    """Mutable handle for a single layout relationship of a view.

    The handle owns at most one solver constraint. The constraint is created
    lazily: the first ``set_value()`` or ``activate()`` resolves the common
    ancestor of the views involved, compiles the relationship and installs
    the constraint there. Later calls update that same constraint in place.

    ``deactivate()`` removes the constraint but keeps the staged value,
    multiplier and priority; while deactivated, ``set_value()`` only stages,
    and ``activate()`` reinstalls with the staged values.

    Handles are normally vended (and cached) by the ``keep_*`` methods of
    View, so asking twice for the same relationship yields the same handle.

    Attributes:
        kind: The relationship this handle represents
        relation: Equal, minimum (>=) or maximum (<=)
    """

    def __init__(
        self,
        kind: RelationshipKind,
        view: View,
        target: View | None = None,
        relation: Relation = Relation.EQUAL,
    ) -> None:
        self.kind = RelationshipKind(kind)
        self.relation = relation
        self._rule = RELATIONSHIP_RULES[self.kind]
        self._view_ref = weakref.ref(view)
        self._target_ref = weakref.ref(target) if target is not None else None
        self._value = self._rule.default_value
        self._multiplier: float | None = None
        self._priority = Priority.required()
        self._constraint: LayoutConstraint | None = None
        self._deactivated = False

    @property
    def view(self) -> View:
        view = self._view_ref()
        if view is None:
            raise ReferenceError(f"View of {self.kind.value} attribute no longer exists")
        return view

    @property
    def target(self) -> View | None:
        if self._target_ref is None:
            return None
        target = self._target_ref()
        if target is None:
            raise ReferenceError(f"Target of {self.kind.value} attribute no longer exists")
        return target

    @property
    def constraint(self) -> LayoutConstraint | None:
        """The installed constraint, or None while inactive."""
        return self._constraint if self.is_active else None

    @property
    def is_active(self) -> bool:
        return self._constraint is not None and self._constraint.is_installed

    @property
    def value(self) -> float:
        """Value as the caller sees it (never sign-inverted)."""
        if self.is_active:
            return caller_value(self.kind, self._constraint.multiplier, self._constraint.constant)
        return self._value

    @value.setter
    def value(self, value: float) -> None:
        self.set_value(value)

    @property
    def multiplier(self) -> float:
        """Multiplier applied to the counterpart's attribute."""
        multiplier, _ = solver_terms(self.kind, self._value, self._multiplier)
        return multiplier

    @property
    def priority(self) -> Priority:
        return self._priority

    @priority.setter
    def priority(self, priority: Priority) -> None:
        self._priority = Priority.parse(priority)
        if self.is_active:
            self._constraint.priority = self._priority

    def set_value(
        self,
        value: float,
        priority: Priority | None = None,
        multiplier: float | None = None,
    ) -> None:
        """Set the value (and optionally priority and multiplier).

        Args:
            value: New value; insets and offsets are positive inward/forward
                for every edge
            priority: New priority; keeps the current one when omitted
            multiplier: Explicit multiplier, only for constant-valued kinds

        Raises:
            DisconnectedHierarchyError: If the views share no ancestor
            MissingTargetError: If the relationship lacks its second view
        """
        if priority is not None:
            priority = Priority.parse(priority)
        placement = self._plan_set(multiplier)
        self._apply_set(value, priority, multiplier, placement)

    def activate(self) -> None:
        """Install the constraint with the staged values; no-op if active."""
        self._activate(None if self.is_active else self.prepare())

    def deactivate(self) -> None:
        """Remove the constraint; staged values are kept for reactivation."""
        self._deactivated = True
        constraint = self._constraint
        self._constraint = None
        if constraint is not None and constraint.owner is not None:
            constraint.owner.remove_constraint(constraint)

    def prepare(self) -> Placement:
        """Resolve where the constraint goes without changing anything.

        Returns:
            Tuple of (owning ancestor, counterpart view or None)
        """
        view = self.view
        counterpart = resolve_counterpart(self.kind, view, self.target)
        if counterpart is None:
            return view, None
        return common_superview(view, counterpart), counterpart

    def _plan_set(self, multiplier: float | None) -> Placement | None:
        """Validate a set_value() call; returns a placement if it will activate."""
        if multiplier is not None and self._rule.value_role is not ValueRole.CONSTANT:
            raise ValueError(f"{self.kind.value} takes its value as the multiplier")
        if self.is_active or self._deactivated:
            return None
        return self.prepare()

    def _apply_set(
        self,
        value: float,
        priority: Priority | None,
        multiplier: float | None,
        placement: Placement | None,
    ) -> None:
        value = float(value)
        if multiplier is not None:
            multiplier = float(multiplier)
        self._value = value
        if multiplier is not None:
            self._multiplier = multiplier
        if priority is not None:
            self._priority = priority

        if self.is_active:
            constraint = self._constraint
            constraint.multiplier, constraint.constant = solver_terms(
                self.kind, self._value, self._multiplier
            )
            constraint.priority = self._priority
            logger.debug("Updated %r", constraint)
        elif placement is not None:
            self._install(placement)

    def _activate(self, placement: Placement | None) -> None:
        self._deactivated = False
        if placement is not None and not self.is_active:
            self._install(placement)

    def _install(self, placement: Placement) -> None:
        owner, counterpart = placement
        constraint = build_constraint(
            self.kind,
            self.view,
            counterpart,
            self._value,
            relation=self.relation,
            priority=self._priority,
            multiplier=self._multiplier,
        )
        owner.add_constraint(constraint)
        self._constraint = constraint

    def __repr__(self) -> str:
        target = f" to {self.target.name!r}" if self._target_ref is not None else ""
        state = "active" if self.is_active else "inactive"
        return (
            f"<KeepAttribute {self.kind.value} of {self.view.name!r}{target} "
            f"{self.relation.value} {self.value:g} @{self._priority.value:g} {state}>"
        )
