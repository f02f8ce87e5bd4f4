"""Plain geometric value types used by views and proxy attributes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Size:
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class Offset:
    """Horizontal and vertical displacement from an alignment line."""

    horizontal: float = 0.0
    vertical: float = 0.0


@dataclass(frozen=True)
class EdgeInsets:
    """Distances from each edge of a container, positive meaning inward."""

    top: float = 0.0
    left: float = 0.0
    bottom: float = 0.0
    right: float = 0.0

    @classmethod
    def uniform(cls, inset: float) -> EdgeInsets:
        return cls(top=inset, left=inset, bottom=inset, right=inset)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle. The y axis grows downward."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def origin(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def offset_by(self, dx: float, dy: float) -> Rect:
        """Return the same rectangle moved by (dx, dy)."""
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    @classmethod
    def from_sequence(cls, values) -> Rect:
        """Build a rect from an ``[x, y, width, height]`` sequence."""
        x, y, width, height = (float(v) for v in values)
        return cls(x, y, width, height)
