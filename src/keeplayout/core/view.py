"""View class: a rectangular element in the layout hierarchy."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Iterator

from ..layout.keep import KeepLayoutMixin
from ..solver.solver import LayoutSolver
from .geometry import Rect

if TYPE_CHECKING:
    from ..solver.constraint import LayoutConstraint

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class View(KeepLayoutMixin):
    """A node in the view hierarchy.

    Each view has a frame expressed in its superview's coordinate space, an
    ordered list of subviews, and the constraints installed on it. Constraints
    installed on a view may reference the view itself and any of its
    descendants. Views compare by identity.

    Keep relationships are created through the ``keep_*`` methods, which vend
    cached attribute handles:

    Example:
        root = View("root", frame=Rect(0, 0, 320, 480))
        card = root.add_subview(View("card"))
        card.keep_insets(EdgeInsets.uniform(20))
        root.layout_if_needed()
        card.frame  # Rect(x=20.0, y=20.0, width=280.0, height=440.0)
    """

    name: str
    frame: Rect = field(default_factory=Rect)
    subviews: list[View] = field(default_factory=list, repr=False)
    superview: View | None = field(default=None, repr=False)
    # Distance of the text baseline above the bottom edge
    baseline_offset: float = 0.0
    constraints: list[LayoutConstraint] = field(default_factory=list, repr=False)
    _keep_attributes: dict = field(default_factory=dict, init=False, repr=False)
    _needs_layout: bool = field(default=True, init=False, repr=False)

    def add_subview(self, view: View) -> View:
        """Append a subview.

        Args:
            view: The view to add; it is detached from its current superview first

        Returns:
            The added view (for chaining)

        Raises:
            ValueError: If ``view`` is this view or one of its ancestors
        """
        if self.is_descendant_of(view):
            raise ValueError(f"Cannot add {view.name!r} inside its own subtree")
        if view.superview is not None:
            view.remove_from_superview()
        view.superview = self
        self.subviews.append(view)
        self.set_needs_layout()
        return view

    def remove_from_superview(self) -> bool:
        """Detach this view (and its subtree) from its superview.

        Constraints installed on former ancestors that reference any view of
        the detached subtree are removed.

        Returns:
            True if the view had a superview
        """
        superview = self.superview
        if superview is None:
            return False

        detached = set(self.iter_views())
        ancestor: View | None = superview
        while ancestor is not None:
            for constraint in list(ancestor.constraints):
                if any(item in detached for item in constraint.items()):
                    ancestor.remove_constraint(constraint)
            ancestor = ancestor.superview

        superview.set_needs_layout()
        superview.subviews.remove(self)
        self.superview = None
        self.set_needs_layout()
        return True

    def add_constraint(self, constraint: LayoutConstraint) -> None:
        """Install a constraint on this view.

        Raises:
            ValueError: If the constraint is installed elsewhere or references
                a view outside this view's subtree
        """
        if constraint.owner is self:
            return
        if constraint.owner is not None:
            raise ValueError(f"{constraint!r} is already installed on {constraint.owner.name!r}")
        for item in constraint.items():
            if not item.is_descendant_of(self):
                raise ValueError(
                    f"Cannot install {constraint!r} on {self.name!r}: "
                    f"{item.name!r} is not in its subtree"
                )
        constraint.owner = self
        self.constraints.append(constraint)
        self.set_needs_layout()
        logger.debug("Installed %r on %s", constraint, self.name)

    def add_constraints(self, constraints: Iterable[LayoutConstraint]) -> None:
        for constraint in constraints:
            self.add_constraint(constraint)

    def remove_constraint(self, constraint: LayoutConstraint) -> bool:
        """Uninstall a constraint from this view.

        Returns:
            True if the constraint was installed here and has been removed
        """
        if constraint.owner is not self:
            return False
        self.constraints.remove(constraint)
        constraint.owner = None
        self.set_needs_layout()
        logger.debug("Removed %r from %s", constraint, self.name)
        return True

    def remove_constraints(self, constraints: Iterable[LayoutConstraint]) -> None:
        for constraint in list(constraints):
            self.remove_constraint(constraint)

    def set_needs_layout(self) -> None:
        """Flag the hierarchy for a layout pass on the next layout_if_needed()."""
        self.root._needs_layout = True

    @property
    def needs_layout(self) -> bool:
        return self.root._needs_layout

    def layout_if_needed(self, solver: LayoutSolver | None = None) -> None:
        """Solve the whole hierarchy now if anything changed since the last pass.

        Args:
            solver: Solver to use; defaults to a fresh LayoutSolver
        """
        root = self.root
        if not root._needs_layout:
            return
        (solver or LayoutSolver()).solve(root)
        root._needs_layout = False

    def global_frame(self) -> Rect:
        """Frame of this view in root coordinates."""
        if self.superview is None:
            return self.frame
        origin = self.superview.global_frame()
        return self.frame.offset_by(origin.x, origin.y)

    def iter_views(self, include_self: bool = True) -> Iterator[View]:
        """Iterate over this view and all descendants (depth-first).

        Args:
            include_self: Whether to include this view in the iteration

        Yields:
            View instances
        """
        if include_self:
            yield self
        for subview in self.subviews:
            yield from subview.iter_views(include_self=True)

    def iter_ancestors(self, include_self: bool = True) -> Iterator[View]:
        """Iterate from this view up to the root."""
        view = self if include_self else self.superview
        while view is not None:
            yield view
            view = view.superview

    def is_descendant_of(self, view: View) -> bool:
        """True if ``view`` is this view or one of its ancestors."""
        return any(ancestor is view for ancestor in self.iter_ancestors())

    def find(self, name: str) -> View | None:
        """Find a descendant view by name.

        Args:
            name: The name to search for

        Returns:
            The first matching view, or None
        """
        for view in self.iter_views():
            if view.name == name:
                return view
        return None

    def find_all(self, name: str) -> list[View]:
        return [view for view in self.iter_views() if view.name == name]

    @property
    def depth(self) -> int:
        """Get the depth of this view in the hierarchy (root = 0)."""
        if self.superview is None:
            return 0
        return self.superview.depth + 1

    @property
    def root(self) -> View:
        """Get the root view of this hierarchy."""
        if self.superview is None:
            return self
        return self.superview.root

    def __repr__(self) -> str:
        subviews_str = f", subviews={len(self.subviews)}" if self.subviews else ""
        return f"View({self.name!r}{subviews_str})"
