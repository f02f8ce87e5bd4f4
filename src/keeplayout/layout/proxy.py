"""Grouped attributes that apply one mutation to several relationships."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from numbers import Real
from typing import Any

from ..core.priority import Priority
from .attribute import KeepAttribute
from .relationships import RelationshipKind


@dataclass(frozen=True)
class ProxyGroup:
    """Members of a named proxy, in grouping order, and their field names."""

    name: str
    kinds: tuple[RelationshipKind, ...]
    fields: tuple[str, ...]


K = RelationshipKind

PROXY_GROUPS: dict[str, ProxyGroup] = {
    group.name: group
    for group in (
        ProxyGroup("size", (K.WIDTH, K.HEIGHT), ("width", "height")),
        ProxyGroup("size_to", (K.RELATIVE_WIDTH, K.RELATIVE_HEIGHT), ("width", "height")),
        ProxyGroup(
            "insets",
            (K.LEFT_INSET, K.RIGHT_INSET, K.TOP_INSET, K.BOTTOM_INSET),
            ("left", "right", "top", "bottom"),
        ),
        ProxyGroup("horizontal_insets", (K.LEFT_INSET, K.RIGHT_INSET), ("left", "right")),
        ProxyGroup("vertical_insets", (K.TOP_INSET, K.BOTTOM_INSET), ("top", "bottom")),
        ProxyGroup("center", (K.HORIZONTAL_CENTER, K.VERTICAL_CENTER), ("x", "y")),
        ProxyGroup(
            "edge_align",
            (K.LEFT_ALIGN, K.RIGHT_ALIGN, K.TOP_ALIGN, K.BOTTOM_ALIGN),
            ("left", "right", "top", "bottom"),
        ),
        ProxyGroup("center_align", (K.VERTICAL_ALIGN, K.HORIZONTAL_ALIGN), ("horizontal", "vertical")),
    )
}

del K


class KeepProxyAttribute:
    """An ordered group of attributes mutated as one logical operation.

    ``set_value`` takes either a single number, applied to every member, or a
    structured value whose fields map one-to-one onto the members (for
    example a ``Size`` for the size proxy or ``EdgeInsets`` for the insets
    proxy). Sequences are distributed positionally and mappings by field
    name; a mapping may name a subset of the members.

    Every member is validated before any of them is changed, so a failure
    (disconnected views, missing superview) leaves all members untouched.

    Example:
        size = view.keep_size()
        size.set_value(Size(100, 50))       # width=100, height=50
        size.set_value(20, Priority.low())  # both 20 at low priority
    """

    def __init__(
        self,
        members: Sequence[KeepAttribute],
        fields: Sequence[str] | None = None,
        name: str = "proxy",
    ) -> None:
        if not members:
            raise ValueError("A proxy attribute needs at least one member")
        if fields is not None and len(fields) != len(members):
            raise ValueError("Proxy fields must match its members one-to-one")
        self.name = name
        self._members = tuple(members)
        self._fields = tuple(fields) if fields is not None else None

    @classmethod
    def from_group(cls, group: ProxyGroup, members: Sequence[KeepAttribute]) -> KeepProxyAttribute:
        return cls(members, group.fields, group.name)

    @property
    def members(self) -> tuple[KeepAttribute, ...]:
        return self._members

    @property
    def fields(self) -> tuple[str, ...] | None:
        return self._fields

    @property
    def values(self) -> tuple[float, ...]:
        return tuple(member.value for member in self._members)

    @property
    def value(self) -> float | tuple[float, ...]:
        """The shared value of all members, or each member's value if they differ."""
        values = self.values
        if all(v == values[0] for v in values):
            return values[0]
        return values

    @value.setter
    def value(self, value: Any) -> None:
        self.set_value(value)

    @property
    def priority(self) -> Priority | tuple[Priority, ...]:
        """The shared priority of all members, or each member's if they differ."""
        priorities = tuple(member.priority for member in self._members)
        if all(p == priorities[0] for p in priorities):
            return priorities[0]
        return priorities

    @priority.setter
    def priority(self, priority: Priority) -> None:
        priority = Priority.parse(priority)
        for member in self._members:
            member.priority = priority

    @property
    def is_active(self) -> bool:
        return all(member.is_active for member in self._members)

    def set_value(self, value: Any, priority: Priority | None = None) -> None:
        """Apply a value to every member in grouping order.

        Args:
            value: Number, structured value, sequence or mapping
            priority: Priority for all affected members; unchanged when omitted

        Raises:
            ValueError: If the value cannot be distributed over the members
            DisconnectedHierarchyError: If any member's views share no ancestor
            MissingTargetError: If any member lacks its second view
        """
        if priority is not None:
            priority = Priority.parse(priority)
        assignments = self._distribute(value)
        placements = [member._plan_set(None) for member, _ in assignments]

        for (member, component), placement in zip(assignments, placements):
            member._apply_set(component, priority, None, placement)

    def activate(self) -> None:
        placements = [None if member.is_active else member.prepare() for member in self._members]
        for member, placement in zip(self._members, placements):
            member._activate(placement)

    def deactivate(self) -> None:
        for member in self._members:
            member.deactivate()

    def _distribute(self, value: Any) -> list[tuple[KeepAttribute, float]]:
        """Pair each affected member with its component of ``value``."""
        if isinstance(value, Real):
            return [(member, float(value)) for member in self._members]

        if isinstance(value, Mapping):
            fields = self._require_fields()
            unknown = set(value) - set(fields)
            if unknown:
                raise ValueError(
                    f"Unknown fields {sorted(unknown)} for {self.name} proxy, expected {list(fields)}"
                )
            return [
                (member, float(value[field]))
                for member, field in zip(self._members, fields)
                if field in value
            ]

        if isinstance(value, Sequence) and not isinstance(value, str):
            if len(value) != len(self._members):
                raise ValueError(
                    f"{self.name} proxy takes {len(self._members)} components, got {len(value)}"
                )
            return [(member, float(component)) for member, component in zip(self._members, value)]

        fields = self._require_fields()
        missing = [field for field in fields if not hasattr(value, field)]
        if missing:
            raise ValueError(f"{value!r} has no {', '.join(missing)} for {self.name} proxy")
        return [(member, float(getattr(value, field))) for member, field in zip(self._members, fields)]

    def _require_fields(self) -> tuple[str, ...]:
        if self._fields is None:
            raise ValueError(f"{self.name} proxy has no field names; pass a number or a sequence")
        return self._fields

    def __iter__(self):
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        return f"<KeepProxyAttribute {self.name} members={len(self._members)}>"
