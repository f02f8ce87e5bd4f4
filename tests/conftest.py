"""Shared fixtures for keeplayout tests."""

import pytest

from keeplayout import Rect, View
from keeplayout.animation import RunLoop, set_main_loop


@pytest.fixture
def root():
    """A 200x100 root view with no subviews."""
    return View("root", frame=Rect(0, 0, 200, 100))


@pytest.fixture
def run_loop():
    """A fresh virtual-clock run loop installed as the main loop."""
    loop = RunLoop()
    previous = set_main_loop(loop)
    yield loop
    set_main_loop(previous)


def pin(view: View, x: float, y: float, width: float, height: float) -> None:
    """Fix a view's frame within its superview with required constraints."""
    view.keep_left_inset().set_value(x)
    view.keep_top_inset().set_value(y)
    view.keep_width().set_value(width)
    view.keep_height().set_value(height)
