"""Animation transactions over view frame changes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntFlag
from typing import TYPE_CHECKING, Callable

import numpy as np

from ..core.geometry import Rect
from .runloop import Timeline, get_main_loop

if TYPE_CHECKING:
    from ..core.view import View

logger = logging.getLogger(__name__)


class AnimationOptions(IntFlag):
    """Flags controlling an animation transaction.

    Without a curve flag the transaction eases in and out.
    """

    NONE = 0
    LAYOUT_SUBVIEWS = 1 << 0
    ALLOW_USER_INTERACTION = 1 << 1
    BEGIN_FROM_CURRENT_STATE = 1 << 2
    CURVE_EASE_IN = 1 << 16
    CURVE_EASE_OUT = 1 << 17
    CURVE_LINEAR = 1 << 18


def ease(progress: float, options: AnimationOptions = AnimationOptions.NONE) -> float:
    """Map linear progress in [0, 1] through the timing curve of ``options``."""
    t = float(np.clip(progress, 0.0, 1.0))
    if options & AnimationOptions.CURVE_LINEAR:
        return t
    if options & AnimationOptions.CURVE_EASE_IN:
        return t * t
    if options & AnimationOptions.CURVE_EASE_OUT:
        return t * (2.0 - t)
    # Smoothstep ease-in-out
    return t * t * (3.0 - 2.0 * t)


@dataclass(frozen=True)
class Transition:
    """Frame change of one view captured by a transaction."""

    view: View
    start: Rect
    end: Rect

    def frame_at(self, progress: float, options: AnimationOptions = AnimationOptions.NONE) -> Rect:
        """Interpolated frame at ``progress`` (0 = start, 1 = end)."""
        start = np.array([self.start.x, self.start.y, self.start.width, self.start.height])
        end = np.array([self.end.x, self.end.y, self.end.width, self.end.height])
        x, y, width, height = start + (end - start) * ease(progress, options)
        return Rect(float(x), float(y), float(width), float(height))


@dataclass(eq=False)
class Transaction:
    """One animation transaction and the frame transitions it captured."""

    duration: float
    delay: float = 0.0
    options: AnimationOptions = AnimationOptions.NONE
    transitions: list[Transition] = field(default_factory=list)
    finished: bool = False


class Animator:
    """Opens animation transactions around changes to a view hierarchy.

    The body runs synchronously when the transaction opens; frames before and
    after the body are captured as transitions. The completion callback runs
    on the timeline once ``delay + duration`` has elapsed.
    """

    def __init__(self, timeline: Timeline | None = None) -> None:
        self.timeline = timeline

    def animate(
        self,
        view: View,
        duration: float,
        body: Callable[[], None],
        delay: float = 0.0,
        options: AnimationOptions = AnimationOptions.NONE,
        completion: Callable[[bool], None] | None = None,
    ) -> Transaction:
        """Run ``body`` inside a transaction covering ``view``'s hierarchy.

        Args:
            view: Any view of the animated hierarchy
            duration: Animation duration in seconds
            body: Changes to animate
            delay: Seconds before the interpolation starts
            options: Animation flags
            completion: Called with True once the transaction finishes

        Returns:
            The transaction, with its captured transitions
        """
        if duration < 0 or delay < 0:
            raise ValueError("Duration and delay must be non-negative")
        timeline = self.timeline or get_main_loop()

        root = view.root
        before = {v: v.frame for v in root.iter_views()}
        body()
        transaction = Transaction(duration=duration, delay=delay, options=options)
        for v in root.iter_views():
            start = before.get(v)
            if start is not None and start != v.frame:
                transaction.transitions.append(Transition(v, start, v.frame))

        logger.debug(
            "Opened transaction over %s: %d transitions, %.3gs",
            root.name,
            len(transaction.transitions),
            duration,
        )

        def finish() -> None:
            transaction.finished = True
            if completion is not None:
                completion(True)

        timeline.call_later(delay + duration, finish)
        return transaction
