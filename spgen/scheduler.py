"""
Cancellable one-shot timers for the clipboard guard.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol

from PySide6.QtCore import QObject, QTimer


class ScheduledTask(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    def call_later(self, seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        """Run `callback` once after `seconds`, unless cancelled first."""
        ...


class QtScheduledTask:
    def __init__(self, timer: QTimer) -> None:
        self._timer: Optional[QTimer] = timer

    @property
    def pending(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None


class QtScheduler:
    """
    One single-shot QTimer per task. Needs a running Qt event loop.
    """

    def __init__(self, parent: Optional[QObject] = None) -> None:
        self.parent = parent

    def call_later(self, seconds: float, callback: Callable[[], None]) -> QtScheduledTask:
        timer = QTimer(self.parent)
        timer.setSingleShot(True)
        task = QtScheduledTask(timer)

        def _fire() -> None:
            # Dispose of the timer before running the callback so a
            # cancel() from inside the callback is a no-op.
            task.cancel()
            callback()

        timer.timeout.connect(_fire)
        timer.start(int(seconds * 1000))
        return task
