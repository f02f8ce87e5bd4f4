"""Qt-backed main loop for applications running a Qt event loop."""

from __future__ import annotations

from functools import partial
from typing import Any, Callable

from PyQt6.QtCore import QTimer


class QtRunLoop:
    """Timeline that schedules callbacks with ``QTimer.singleShot``.

    A QCoreApplication (or QApplication) must exist, and its event loop must
    be running for callbacks to fire.

    Example:
        app = QApplication(sys.argv)
        set_main_loop(QtRunLoop())
        view.keep_animated(0.3, lambda: view.keep_width().set_value(200))
        app.exec()
    """

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> None:
        if delay < 0:
            raise ValueError(f"Delay must be non-negative, got {delay!r}")
        QTimer.singleShot(round(delay * 1000), partial(callback, *args))
