"""Keep methods mixed into View.

Every ``keep_*`` accessor returns a cached handle: asking twice for the same
relationship (same kind, target and relation) yields the very same
KeepAttribute or KeepProxyAttribute, so repeated calls never pile up
duplicate constraints. Accessors that take a value set it at required
priority unless told otherwise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable

from ..core.geometry import EdgeInsets, Offset, Point, Size
from ..core.priority import Priority
from ..solver.constraint import LayoutConstraint, Relation
from ..animation.animator import AnimationOptions
from ..animation.runloop import Timeline
from ..animation.scheduler import AnimatedBatch, schedule_batch
from . import ancestors
from .attribute import KeepAttribute
from .proxy import PROXY_GROUPS, KeepProxyAttribute
from .relationships import RelationshipKind

if TYPE_CHECKING:
    from ..core.view import View

K = RelationshipKind
EQUAL = Relation.EQUAL


class KeepLayoutMixin:
    """Keep accessors for views; relies on the view's ``_keep_attributes`` cache."""

    _keep_attributes: dict

    # Generic accessors

    def keep(
        self,
        kind: RelationshipKind | str,
        to: View | None = None,
        relation: Relation | str = EQUAL,
    ) -> KeepAttribute:
        """Return the cached attribute for a relationship, creating it on first use.

        Args:
            kind: Relationship kind (or its name, e.g. "left_offset")
            to: Target view for two-view relationships
            relation: Equal, minimum or maximum

        Returns:
            The attribute handle for (kind, to, relation)
        """
        kind = RelationshipKind(kind)
        relation = Relation.parse(relation)
        key = (kind, id(to) if to is not None else None, relation)
        attribute = self._keep_attributes.get(key)
        if attribute is None or not _same_target(attribute, to):
            _prune_collected(self._keep_attributes)
            attribute = KeepAttribute(kind, self, to, relation)
            self._keep_attributes[key] = attribute
        return attribute

    def keep_group(
        self,
        name: str,
        to: View | None = None,
        relation: Relation | str = EQUAL,
    ) -> KeepProxyAttribute:
        """Return the cached proxy attribute for a named group (see PROXY_GROUPS)."""
        if name not in PROXY_GROUPS:
            raise ValueError(f"Unknown proxy group {name!r}, expected one of {sorted(PROXY_GROUPS)}")
        relation = Relation.parse(relation)
        group = PROXY_GROUPS[name]
        members = [self.keep(kind, to, relation) for kind in group.kinds]

        key = ("group", name, id(to) if to is not None else None, relation)
        proxy = self._keep_attributes.get(key)
        if proxy is None or any(a is not b for a, b in zip(proxy.members, members)):
            _prune_collected(self._keep_attributes)
            proxy = KeepProxyAttribute.from_group(group, members)
            self._keep_attributes[key] = proxy
        return proxy

    # Dimensions

    def keep_width(self, relation: Relation | str = EQUAL) -> KeepAttribute:
        return self.keep(K.WIDTH, relation=relation)

    def keep_height(self, relation: Relation | str = EQUAL) -> KeepAttribute:
        return self.keep(K.HEIGHT, relation=relation)

    def keep_size(
        self,
        size: Size | float | None = None,
        priority: Priority | None = None,
        relation: Relation | str = EQUAL,
    ) -> KeepProxyAttribute:
        """Width and height together; sets them when ``size`` is given."""
        return _set_if_given(self.keep_group("size", relation=relation), size, priority)

    def keep_aspect_ratio(self, relation: Relation | str = EQUAL) -> KeepAttribute:
        """Width as a multiple of height."""
        return self.keep(K.ASPECT_RATIO, relation=relation)

    def keep_width_to(self, view: View, relation: Relation | str = EQUAL) -> KeepAttribute:
        """Width as a multiple of another view's width."""
        return self.keep(K.RELATIVE_WIDTH, view, relation)

    def keep_height_to(self, view: View, relation: Relation | str = EQUAL) -> KeepAttribute:
        return self.keep(K.RELATIVE_HEIGHT, view, relation)

    def keep_size_to(self, view: View, relation: Relation | str = EQUAL) -> KeepProxyAttribute:
        return self.keep_group("size_to", view, relation)

    # Superview insets

    def keep_left_inset(self, relation: Relation | str = EQUAL) -> KeepAttribute:
        return self.keep(K.LEFT_INSET, relation=relation)

    def keep_right_inset(self, relation: Relation | str = EQUAL) -> KeepAttribute:
        return self.keep(K.RIGHT_INSET, relation=relation)

    def keep_top_inset(self, relation: Relation | str = EQUAL) -> KeepAttribute:
        return self.keep(K.TOP_INSET, relation=relation)

    def keep_bottom_inset(self, relation: Relation | str = EQUAL) -> KeepAttribute:
        return self.keep(K.BOTTOM_INSET, relation=relation)

    def keep_insets(
        self,
        insets: EdgeInsets | float | None = None,
        priority: Priority | None = None,
        relation: Relation | str = EQUAL,
    ) -> KeepProxyAttribute:
        """All four insets to the superview (left, right, top, bottom)."""
        return _set_if_given(self.keep_group("insets", relation=relation), insets, priority)

    def keep_horizontal_insets(self, relation: Relation | str = EQUAL) -> KeepProxyAttribute:
        return self.keep_group("horizontal_insets", relation=relation)

    def keep_vertical_insets(self, relation: Relation | str = EQUAL) -> KeepProxyAttribute:
        return self.keep_group("vertical_insets", relation=relation)

    # Center

    def keep_horizontal_center(self, relation: Relation | str = EQUAL) -> KeepAttribute:
        """Horizontal position as a fraction of the superview: 0 left, 0.5 middle, 1 right."""
        return self.keep(K.HORIZONTAL_CENTER, relation=relation)

    def keep_vertical_center(self, relation: Relation | str = EQUAL) -> KeepAttribute:
        return self.keep(K.VERTICAL_CENTER, relation=relation)

    def keep_center(
        self,
        center: Point | float | None = None,
        priority: Priority | None = None,
        relation: Relation | str = EQUAL,
    ) -> KeepProxyAttribute:
        return _set_if_given(self.keep_group("center", relation=relation), center, priority)

    def keep_centered(self, priority: Priority | None = None) -> KeepProxyAttribute:
        return self.keep_center(Point(0.5, 0.5), priority)

    # Offsets

    def keep_left_offset_to(self, view: View, relation: Relation | str = EQUAL) -> KeepAttribute:
        """Distance from ``view``'s right edge to this view's left edge."""
        return self.keep(K.LEFT_OFFSET, view, relation)

    def keep_right_offset_to(self, view: View, relation: Relation | str = EQUAL) -> KeepAttribute:
        """Distance from this view's right edge to ``view``'s left edge."""
        return self.keep(K.RIGHT_OFFSET, view, relation)

    def keep_top_offset_to(self, view: View, relation: Relation | str = EQUAL) -> KeepAttribute:
        return self.keep(K.TOP_OFFSET, view, relation)

    def keep_bottom_offset_to(self, view: View, relation: Relation | str = EQUAL) -> KeepAttribute:
        return self.keep(K.BOTTOM_OFFSET, view, relation)

    # Alignments

    def keep_left_align_to(self, view: View, relation: Relation | str = EQUAL) -> KeepAttribute:
        return self.keep(K.LEFT_ALIGN, view, relation)

    def keep_right_align_to(self, view: View, relation: Relation | str = EQUAL) -> KeepAttribute:
        return self.keep(K.RIGHT_ALIGN, view, relation)

    def keep_top_align_to(self, view: View, relation: Relation | str = EQUAL) -> KeepAttribute:
        return self.keep(K.TOP_ALIGN, view, relation)

    def keep_bottom_align_to(self, view: View, relation: Relation | str = EQUAL) -> KeepAttribute:
        return self.keep(K.BOTTOM_ALIGN, view, relation)

    def keep_edge_align_to(
        self,
        view: View,
        insets: EdgeInsets | float | None = None,
        priority: Priority | None = None,
    ) -> KeepProxyAttribute:
        """Align all four edges to ``view``, inset by ``insets`` (default zero)."""
        proxy = self.keep_group("edge_align", view)
        return _set_if_given(proxy, EdgeInsets() if insets is None else insets, priority)

    def keep_vertical_align_to(self, view: View, relation: Relation | str = EQUAL) -> KeepAttribute:
        """Share the vertical center line (x axis) with ``view``."""
        return self.keep(K.VERTICAL_ALIGN, view, relation)

    def keep_horizontal_align_to(self, view: View, relation: Relation | str = EQUAL) -> KeepAttribute:
        """Share the horizontal center line (y axis) with ``view``."""
        return self.keep(K.HORIZONTAL_ALIGN, view, relation)

    def keep_center_align_to(
        self,
        view: View,
        offset: Offset | float | None = None,
        priority: Priority | None = None,
    ) -> KeepProxyAttribute:
        proxy = self.keep_group("center_align", view)
        return _set_if_given(proxy, Offset() if offset is None else offset, priority)

    def keep_baseline_align_to(self, view: View, relation: Relation | str = EQUAL) -> KeepAttribute:
        return self.keep(K.BASELINE_ALIGN, view, relation)

    # Animation

    def keep_animated(
        self,
        duration: float,
        layout: Callable[[], None],
        delay: float = 0.0,
        options: AnimationOptions = AnimationOptions.NONE,
        completion: Callable[[bool], None] | None = None,
        timeline: Timeline | None = None,
    ) -> AnimatedBatch:
        """Run ``layout`` after ``delay`` on the main loop and animate the result.

        The layout closure itself is deferred by the delay (not only the
        interpolation), and a layout pass on this view's hierarchy runs inside
        the animation transaction.

        Args:
            duration: Animation duration in seconds
            layout: Closure mutating keep attributes or constraints
            delay: Seconds to wait before running ``layout``
            options: Animation flags
            completion: Called with ``finished`` when the animation ends
            timeline: Timeline to schedule on; defaults to the main loop

        Returns:
            The scheduled batch
        """
        batch = AnimatedBatch(
            view=self,
            duration=duration,
            mutations=[layout],
            delay=delay,
            options=options,
            completion=completion,
        )
        return schedule_batch(batch, timeline)

    # Common superview

    def common_superview(self, view: View) -> View:
        return ancestors.common_superview(self, view)

    def add_constraint_to_common_superview(self, constraint: LayoutConstraint) -> View:
        return ancestors.add_constraint_to_common_superview(constraint)

    def remove_constraint_from_common_superview(self, constraint: LayoutConstraint) -> bool:
        return ancestors.remove_constraint_from_common_superview(constraint)

    def add_constraints_to_common_superview(self, constraints: Iterable[LayoutConstraint]) -> None:
        ancestors.add_constraints_to_common_superview(constraints)

    def remove_constraints_from_common_superview(self, constraints: Iterable[LayoutConstraint]) -> None:
        ancestors.remove_constraints_from_common_superview(constraints)


def _same_target(attribute: KeepAttribute, to: View | None) -> bool:
    # Guards against id() reuse after a target view was collected
    if to is None:
        return attribute._target_ref is None
    return attribute._target_ref is not None and attribute._target_ref() is to


def _prune_collected(cache: dict) -> None:
    # Handles whose target view is gone can never be vended again
    dead = [key for key, handle in cache.items() if _target_collected(handle)]
    for key in dead:
        del cache[key]


def _target_collected(handle: KeepAttribute | KeepProxyAttribute) -> bool:
    attribute = handle.members[0] if isinstance(handle, KeepProxyAttribute) else handle
    return attribute._target_ref is not None and attribute._target_ref() is None


def _set_if_given(proxy: KeepProxyAttribute, value, priority: Priority | None) -> KeepProxyAttribute:
    if value is not None:
        proxy.set_value(value, priority if priority is not None else Priority.required())
    return proxy
