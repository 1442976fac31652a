from __future__ import annotations

import os
import random
from typing import Callable, List, Optional

import pytest

from spgen.errors import ClipboardWriteError
from spgen.guard import ClipboardEvent, ClipboardGuard


class SeededSource:
    """Deterministic 32-bit source for reproducible tests."""

    def __init__(self, seed: int = 1234) -> None:
        self._rng = random.Random(seed)
        self.draws = 0

    def next_u32(self) -> int:
        self.draws += 1
        return self._rng.getrandbits(32)


class SequenceSource:
    """Hands out the given values in order, then repeats them."""

    def __init__(self, values: List[int]) -> None:
        self.values = list(values)
        self.draws = 0

    def next_u32(self) -> int:
        value = self.values[self.draws % len(self.values)]
        self.draws += 1
        return value


class FakeTask:
    def __init__(self, when: float, seq: int, callback: Callable[[], None]) -> None:
        self.when = when
        self.seq = seq
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Manual clock: tasks run only when the test calls advance()."""

    def __init__(self) -> None:
        self.now = 0.0
        self.tasks: List[FakeTask] = []
        self._seq = 0

    def call_later(self, seconds: float, callback: Callable[[], None]) -> FakeTask:
        self._seq += 1
        task = FakeTask(self.now + seconds, self._seq, callback)
        self.tasks.append(task)
        return task

    def pending(self) -> List[FakeTask]:
        return [t for t in self.tasks if not t.cancelled and not t.fired]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self.pending() if t.when <= target]
            if not due:
                break
            task = min(due, key=lambda t: (t.when, t.seq))
            self.now = task.when
            task.fired = True
            task.callback()
        self.now = target


class FakeClipboard:
    def __init__(self) -> None:
        self.text = ""
        self.writes: List[str] = []
        self.attempts: List[str] = []
        self.fail_on: Optional[Callable[[str], bool]] = None

    def write(self, text: str) -> None:
        self.attempts.append(text)
        if self.fail_on is not None and self.fail_on(text):
            raise ClipboardWriteError("clipboard is locked")
        self.writes.append(text)
        self.text = text


@pytest.fixture(scope="session")
def qt_app():
    """One QApplication for every Qt test, on the offscreen platform."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PySide6.QtWidgets import QApplication

    return QApplication.instance() or QApplication([])


@pytest.fixture
def source() -> SeededSource:
    return SeededSource()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture
def events() -> List[ClipboardEvent]:
    return []


@pytest.fixture
def guard(clipboard, scheduler, events) -> ClipboardGuard:
    g = ClipboardGuard(clipboard, scheduler)
    g.subscribe(events.append)
    return g
