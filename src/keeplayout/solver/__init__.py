"""Constraint objects and the solver that lays out view hierarchies."""

from .constraint import Axis, LayoutAttribute, LayoutConstraint, Relation
from .solver import LayoutSolver

__all__ = ["Axis", "LayoutAttribute", "LayoutConstraint", "Relation", "LayoutSolver"]
