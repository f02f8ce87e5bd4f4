"""Linear program solver for view hierarchies.

Every active constraint installed anywhere in a hierarchy becomes one row of a
linear program over four variables per view (left, top, width, height, all
in root coordinates). Required constraints are hard rows; optional ones get a
slack variable whose cost is the constraint's priority, so stronger
constraints win when the system is over-constrained. A very weak stay keeps
every unconstrained quantity at its current value.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray
from scipy.optimize import linprog

from ..core.geometry import Rect
from ..errors import UnsatisfiableConstraintsError
from .constraint import Axis, LayoutAttribute, LayoutConstraint, Relation

if TYPE_CHECKING:
    from ..core.view import View

logger = logging.getLogger(__name__)

# Cost of moving a view away from its current frame; far below any priority
STAY_WEIGHT = 1e-3

# Variable offsets within a view's block
_X, _Y, _W, _H = range(4)
VARS_PER_VIEW = 4

# attribute -> (position variable, dimension variable, dimension factor)
_ATTRIBUTE_TERMS: dict[LayoutAttribute, tuple[int | None, int | None, float]] = {
    LayoutAttribute.LEFT: (_X, None, 0.0),
    LayoutAttribute.RIGHT: (_X, _W, 1.0),
    LayoutAttribute.CENTER_X: (_X, _W, 0.5),
    LayoutAttribute.WIDTH: (None, _W, 1.0),
    LayoutAttribute.TOP: (_Y, None, 0.0),
    LayoutAttribute.BOTTOM: (_Y, _H, 1.0),
    LayoutAttribute.CENTER_Y: (_Y, _H, 0.5),
    LayoutAttribute.HEIGHT: (None, _H, 1.0),
    LayoutAttribute.BASELINE: (_Y, _H, 1.0),
}


class _Program:
    """Accumulates linear program rows before handing them to linprog."""

    def __init__(self, base_size: int) -> None:
        self.base_size = base_size
        # (row over base variables, bound, [(slack index, coefficient)])
        self.eq_rows: list[tuple[NDArray[np.float64], float, list[tuple[int, float]]]] = []
        self.ub_rows: list[tuple[NDArray[np.float64], float, list[tuple[int, float]]]] = []
        self.slack_costs: list[float] = []

    def _slack(self, weight: float) -> int:
        self.slack_costs.append(weight)
        return len(self.slack_costs) - 1

    def add(self, row: NDArray[np.float64], bound: float, relation: Relation, weight: float | None) -> None:
        """Add ``row . v (relation) bound``; ``weight=None`` makes it required."""
        if relation is Relation.GREATER_OR_EQUAL:
            row, bound = -row, -bound

        if relation is Relation.EQUAL:
            slacks = []
            if weight is not None:
                # row . v - s_plus + s_minus = bound
                slacks = [(self._slack(weight), -1.0), (self._slack(weight), 1.0)]
            self.eq_rows.append((row, bound, slacks))
        else:
            slacks = [] if weight is None else [(self._slack(weight), -1.0)]
            self.ub_rows.append((row, bound, slacks))

    def _matrix(self, rows) -> tuple[NDArray[np.float64] | None, NDArray[np.float64] | None]:
        if not rows:
            return None, None
        size = self.base_size + len(self.slack_costs)
        matrix = np.zeros((len(rows), size), dtype=np.float64)
        bounds = np.zeros(len(rows), dtype=np.float64)
        for i, (row, bound, slacks) in enumerate(rows):
            matrix[i, : self.base_size] = row
            for slack, coefficient in slacks:
                matrix[i, self.base_size + slack] = coefficient
            bounds[i] = bound
        return matrix, bounds

    def solve(self) -> NDArray[np.float64]:
        a_eq, b_eq = self._matrix(self.eq_rows)
        a_ub, b_ub = self._matrix(self.ub_rows)
        cost = np.concatenate([
            np.zeros(self.base_size, dtype=np.float64),
            np.asarray(self.slack_costs, dtype=np.float64),
        ])
        bounds = [(None, None)] * self.base_size + [(0, None)] * len(self.slack_costs)
        result = linprog(
            cost, A_ub=a_ub, b_ub=b_ub, A_eq=a_eq, b_eq=b_eq, bounds=bounds, method="highs"
        )
        if result.status != 0:
            raise UnsatisfiableConstraintsError(
                f"Layout could not be solved: {result.message}"
            )
        return result.x[: self.base_size]


class LayoutSolver:
    """Solves the constraints of a view hierarchy and assigns frames.

    Example:
        solver = LayoutSolver()
        solver.solve(root)  # every view of root's tree gets a new frame
    """

    def __init__(self, stay_weight: float = STAY_WEIGHT) -> None:
        self.stay_weight = stay_weight

    def solve(self, root: View) -> dict[View, Rect]:
        """Solve all active constraints under ``root`` and update frames.

        Args:
            root: Root of the hierarchy; its own frame is kept fixed

        Returns:
            Mapping of view to its solved frame in root coordinates

        Raises:
            UnsatisfiableConstraintsError: If required constraints conflict
        """
        views = list(root.iter_views())
        index = {view: i * VARS_PER_VIEW for i, view in enumerate(views)}
        program = _Program(len(views) * VARS_PER_VIEW)

        constraint_count = 0
        for view in views:
            for constraint in view.constraints:
                row, bound = self._constraint_row(constraint, view, index, program.base_size)
                weight = None if constraint.priority.is_required else constraint.priority.value
                program.add(row, bound, constraint.relation, weight)
                constraint_count += 1

        for view in views:
            current = view.global_frame()
            weight = None if view is root else self.stay_weight
            for offset, value in zip((_X, _Y, _W, _H), (current.x, current.y, current.width, current.height)):
                row = np.zeros(program.base_size, dtype=np.float64)
                row[index[view] + offset] = 1.0
                program.add(row, value, Relation.EQUAL, weight)

        logger.debug(
            "Solving %d constraints over %d views under %s", constraint_count, len(views), root.name
        )
        solution = program.solve()

        frames: dict[View, Rect] = {}
        for view in views:
            start = index[view]
            x, y, width, height = (float(v) for v in solution[start : start + VARS_PER_VIEW])
            frames[view] = Rect(x, y, width, height)

        for view in views:
            solved = frames[view]
            if view.superview is None:
                view.frame = solved
            else:
                parent = frames[view.superview]
                view.frame = solved.offset_by(-parent.x, -parent.y)
        return frames

    def _constraint_row(
        self,
        constraint: LayoutConstraint,
        owner: View,
        index: dict[View, int],
        size: int,
    ) -> tuple[NDArray[np.float64], float]:
        """Rearrange a constraint to ``row . v (relation) bound``."""
        row = np.zeros(size, dtype=np.float64)
        bound = constraint.constant
        bound -= _accumulate(row, 1.0, constraint.first_item, constraint.first_attribute, owner, index)
        if constraint.second_item is not None:
            bound += constraint.multiplier * _accumulate(
                row,
                -constraint.multiplier,
                constraint.second_item,
                constraint.second_attribute,
                owner,
                index,
            )
        return row, bound


def _accumulate(
    row: NDArray[np.float64],
    scale: float,
    view: View,
    attribute: LayoutAttribute,
    owner: View,
    index: dict[View, int],
) -> float:
    """Add ``scale * view.attribute`` (in owner coordinates) into ``row``.

    Returns:
        The constant part of the attribute expression (unscaled)
    """
    position, dimension, factor = _ATTRIBUTE_TERMS[attribute]
    start = index[view]
    if position is not None:
        row[start + position] += scale
        # Measure positions from the owner's top-left corner
        origin = _X if attribute.axis is Axis.HORIZONTAL else _Y
        row[index[owner] + origin] -= scale
    if dimension is not None:
        row[start + dimension] += scale * factor
    if attribute is LayoutAttribute.BASELINE:
        return -view.baseline_offset
    return 0.0
