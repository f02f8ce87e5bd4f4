"""Deferred, animated application of batches of keep mutations.

A batch waits ``delay`` seconds on the main timeline (at least one tick, even
for a zero delay), then runs its mutations in order, then opens an animation
transaction around a forced layout pass so the animation sees the new
constraint values::

    PENDING --(delay elapsed)--> RUNNING --(transaction finished)--> COMPLETED

If a mutation or the layout pass raises, the batch completes with
``finished=False`` and the error propagates out of the timeline callback.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import TYPE_CHECKING, Callable

from .animator import AnimationOptions, Animator, Transaction
from .runloop import Timeline, get_main_loop

if TYPE_CHECKING:
    from ..core.view import View

logger = logging.getLogger(__name__)


class BatchState(Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass(eq=False)
class AnimatedBatch:
    """A batch of layout mutations to apply and animate together.

    Attributes:
        view: View whose hierarchy is laid out and animated
        duration: Animation duration in seconds
        mutations: Callables run in order when the batch fires
        delay: Seconds to wait before running the mutations
        options: Animation flags
        completion: Called once with ``finished`` when the animation ends
    """

    view: View
    duration: float
    mutations: list[Callable[[], None]] = field(default_factory=list)
    delay: float = 0.0
    options: AnimationOptions = AnimationOptions.NONE
    completion: Callable[[bool], None] | None = None
    state: BatchState = field(default=BatchState.PENDING, init=False)
    transaction: Transaction | None = field(default=None, init=False, repr=False)
    _scheduled: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.duration < 0:
            raise ValueError(f"Duration must be non-negative, got {self.duration!r}")
        if self.delay < 0:
            raise ValueError(f"Delay must be non-negative, got {self.delay!r}")

    def add(self, mutation: Callable[[], None]) -> Callable[[], None]:
        """Append a mutation; usable as a decorator."""
        if self.state is not BatchState.PENDING or self._scheduled:
            raise ValueError("Cannot add mutations to a batch that has been scheduled")
        self.mutations.append(mutation)
        return mutation


def schedule_batch(
    batch: AnimatedBatch,
    timeline: Timeline | None = None,
    animator: Animator | None = None,
) -> AnimatedBatch:
    """Queue a batch on the timeline; it never runs inline with this call.

    Args:
        batch: The batch to run
        timeline: Timeline to wait on; defaults to the main loop
        animator: Animator for the transaction; defaults to one on the same timeline

    Returns:
        The scheduled batch

    Raises:
        ValueError: If the batch was already scheduled
    """
    if batch._scheduled:
        raise ValueError("Batch has already been scheduled")
    timeline = timeline or get_main_loop()
    animator = animator or Animator(timeline)
    batch._scheduled = True
    timeline.call_later(batch.delay, partial(_run_batch, batch, animator))
    logger.debug("Scheduled batch on %s after %.3gs", batch.view.name, batch.delay)
    return batch


def _run_batch(batch: AnimatedBatch, animator: Animator) -> None:
    batch.state = BatchState.RUNNING
    logger.debug("Running %d mutations on %s", len(batch.mutations), batch.view.name)
    try:
        for mutation in batch.mutations:
            mutation()
        batch.transaction = animator.animate(
            batch.view,
            batch.duration,
            partial(_force_layout, batch.view),
            options=batch.options,
            completion=partial(_complete_batch, batch),
        )
    except Exception:
        # A failed batch still completes, unfinished, before the error propagates
        _complete_batch(batch, False)
        raise


def _force_layout(view: View) -> None:
    view.set_needs_layout()
    view.layout_if_needed()


def _complete_batch(batch: AnimatedBatch, finished: bool) -> None:
    if batch.state is BatchState.COMPLETED:
        return
    batch.state = BatchState.COMPLETED
    logger.debug("Completed batch on %s", batch.view.name)
    if batch.completion is not None:
        batch.completion(finished)
