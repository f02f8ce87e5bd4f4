"""Declarative keep relationships over a constraint-based 2D layout solver."""

from .core import EdgeInsets, Offset, Point, Priority, Rect, Size, View
from .errors import (
    DisconnectedHierarchyError,
    KeepLayoutError,
    MissingTargetError,
    UnsatisfiableConstraintsError,
)
from .layout import KeepAttribute, KeepProxyAttribute, RelationshipKind
from .layout.loader import LayoutLoader
from .solver import LayoutConstraint, LayoutSolver, Relation

__version__ = "0.1.0"

__all__ = [
    "EdgeInsets",
    "Offset",
    "Point",
    "Priority",
    "Rect",
    "Size",
    "View",
    "DisconnectedHierarchyError",
    "KeepLayoutError",
    "MissingTargetError",
    "UnsatisfiableConstraintsError",
    "KeepAttribute",
    "KeepProxyAttribute",
    "RelationshipKind",
    "LayoutLoader",
    "LayoutConstraint",
    "LayoutSolver",
    "Relation",
]
