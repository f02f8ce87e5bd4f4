"""Core view hierarchy components."""

from .geometry import EdgeInsets, Offset, Point, Rect, Size
from .priority import Priority
from .view import View

__all__ = ["EdgeInsets", "Offset", "Point", "Rect", "Size", "Priority", "View"]
