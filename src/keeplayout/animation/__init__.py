"""Run loop, animation transactions and animated batch scheduling."""

from .animator import AnimationOptions, Animator, Transaction, Transition, ease
from .runloop import RunLoop, Timeline, get_main_loop, set_main_loop
from .scheduler import AnimatedBatch, BatchState, schedule_batch

__all__ = [
    "AnimationOptions",
    "Animator",
    "Transaction",
    "Transition",
    "ease",
    "RunLoop",
    "Timeline",
    "get_main_loop",
    "set_main_loop",
    "AnimatedBatch",
    "BatchState",
    "schedule_batch",
]
