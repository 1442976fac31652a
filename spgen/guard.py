"""
Clipboard guard: copies a secret to the clipboard and erases it again
after a countdown.

States:

- IDLE: nothing on display, no timer running.
- COPIED_NO_TIMER: copied without auto-clear; the success message
  expires after STATUS_MESSAGE_SECONDS.
- COUNTING_DOWN: copied with auto-clear; one tick per second from
  CLIPBOARD_CLEAR_SECONDS down to 0, then the clipboard is emptied.
- CLEARED: the clipboard was emptied; the message expires after
  STATUS_MESSAGE_SECONDS.

Every scheduled task is keyed by the id of the session (or transient
message) that owns it. A new copy cancels the previous session's tasks
by id, so a stale timer can never clear a newer secret.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from .config import CLIPBOARD_CLEAR_SECONDS, STATUS_MESSAGE_SECONDS
from .errors import ClipboardClearError, ClipboardWriteError

if TYPE_CHECKING:
    from .clipboard import Clipboard
    from .scheduler import ScheduledTask, Scheduler

logger = logging.getLogger(__name__)


class GuardState(Enum):
    IDLE = "idle"
    COPIED_NO_TIMER = "copied_no_timer"
    COUNTING_DOWN = "counting_down"
    CLEARED = "cleared"


class ClipboardEventKind(Enum):
    SUCCESS = "success"
    WARNING = "warning"
    COUNTDOWN_TICK = "countdown_tick"
    CLEARED = "cleared"
    FAILURE = "failure"
    # A transient message expired; the status line should be blanked.
    IDLE = "idle"


@dataclass(frozen=True)
class ClipboardEvent:
    kind: ClipboardEventKind
    message: str
    seconds_remaining: Optional[int] = None
    error: Optional[Exception] = None


@dataclass
class ClipboardSession:
    session_id: int
    auto_clear_enabled: bool
    seconds_remaining: int
    active: bool = True


Listener = Callable[[ClipboardEvent], None]


class ClipboardGuard:
    """
    Owns every write to the clipboard and the timers around it.
    """

    def __init__(
        self,
        clipboard: Clipboard,
        scheduler: Scheduler,
        clear_after: int = CLIPBOARD_CLEAR_SECONDS,
        message_seconds: float = STATUS_MESSAGE_SECONDS,
    ) -> None:
        self.clipboard = clipboard
        self.scheduler = scheduler
        self.clear_after = clear_after
        self.message_seconds = message_seconds

        self._ids = itertools.count(1)
        self._tasks: Dict[int, ScheduledTask] = {}
        self._listeners: List[Listener] = []
        self._state = GuardState.IDLE
        self._session: Optional[ClipboardSession] = None
        # Id of the transient message currently on display, if any.
        self._display_id: Optional[int] = None

    # --- public API ---

    @property
    def state(self) -> GuardState:
        return self._state

    @property
    def session(self) -> Optional[ClipboardSession]:
        return self._session

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for ClipboardEvents. Returns a callable that
        removes it again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def copy(self, secret: str, auto_clear: bool = True) -> bool:
        """
        Put `secret` on the clipboard. Returns False if the write failed.

        A failed write leaves any running countdown alone; a successful
        one supersedes the previous session.
        """
        try:
            self.clipboard.write(secret)
        except ClipboardWriteError as exc:
            logger.warning("Copy to clipboard failed: %s", exc)
            self._show_transient(
                ClipboardEventKind.FAILURE, "Failed to copy password", error=exc
            )
            return False

        self._supersede()
        session = ClipboardSession(
            session_id=next(self._ids),
            auto_clear_enabled=auto_clear,
            seconds_remaining=self.clear_after if auto_clear else 0,
        )
        self._session = session
        logger.info(
            "Secret copied to clipboard (session %d, auto-clear %s)",
            session.session_id,
            "on" if auto_clear else "off",
        )

        if not auto_clear:
            self._state = GuardState.COPIED_NO_TIMER
            self._show_transient(
                ClipboardEventKind.SUCCESS, "Password copied to clipboard!"
            )
            return True

        self._emit(ClipboardEvent(ClipboardEventKind.SUCCESS, "Password copied to clipboard!"))
        self._state = GuardState.COUNTING_DOWN
        self._countdown_step(session)
        return True

    def close(self) -> None:
        """
        Cancel every pending task. If a countdown is still running the
        clipboard is emptied right away so the secret does not outlive
        the guard.
        """
        session = self._session
        for task in self._tasks.values():
            task.cancel()
        self._tasks.clear()
        self._display_id = None
        self._session = None
        self._state = GuardState.IDLE

        if session is None or not session.active or not session.auto_clear_enabled:
            return
        session.active = False
        try:
            self.clipboard.write("")
        except ClipboardWriteError as exc:
            logger.warning("Could not clear clipboard on close: %s", exc)
            error = ClipboardClearError(str(exc))
            error.__cause__ = exc
            self._emit(
                ClipboardEvent(
                    ClipboardEventKind.WARNING, "Could not clear clipboard", error=error
                )
            )
            return
        logger.info("Clipboard cleared on close (session %d)", session.session_id)
        self._emit(ClipboardEvent(ClipboardEventKind.CLEARED, "Clipboard cleared for security"))

    # --- countdown ---

    def _countdown_step(self, session: ClipboardSession) -> None:
        remaining = session.seconds_remaining
        unit = "second" if remaining == 1 else "seconds"
        self._emit(
            ClipboardEvent(
                ClipboardEventKind.COUNTDOWN_TICK,
                f"Clipboard will auto-clear in {remaining} {unit}",
                seconds_remaining=remaining,
            )
        )
        if remaining <= 0:
            self._clear(session)
            return
        self._schedule(session.session_id, 1, partial(self._on_tick, session.session_id))

    def _on_tick(self, session_id: int) -> None:
        self._tasks.pop(session_id, None)
        session = self._session
        if session is None or session.session_id != session_id or not session.active:
            # Superseded sessions have their tasks cancelled; nothing to do.
            return
        session.seconds_remaining -= 1
        self._countdown_step(session)

    def _clear(self, session: ClipboardSession) -> None:
        session.active = False
        self._session = None
        try:
            self.clipboard.write("")
        except ClipboardWriteError as exc:
            logger.warning(
                "Could not clear clipboard (session %d): %s", session.session_id, exc
            )
            error = ClipboardClearError(str(exc))
            error.__cause__ = exc
            self._state = GuardState.IDLE
            self._show_transient(
                ClipboardEventKind.WARNING, "Could not clear clipboard", error=error
            )
            return

        logger.info("Clipboard cleared (session %d)", session.session_id)
        self._state = GuardState.CLEARED
        self._show_transient(ClipboardEventKind.CLEARED, "Clipboard cleared for security")

    # --- transient messages ---

    def _show_transient(
        self,
        kind: ClipboardEventKind,
        message: str,
        error: Optional[Exception] = None,
    ) -> None:
        """
        Emit a message that reverts the display to idle after
        message_seconds, replacing any message still on display.
        """
        self._cancel(self._display_id)
        self._emit(ClipboardEvent(kind, message, error=error))
        display_id = next(self._ids)
        self._display_id = display_id
        self._schedule(
            display_id,
            self.message_seconds,
            partial(self._on_display_expired, display_id),
        )

    def _on_display_expired(self, display_id: int) -> None:
        self._tasks.pop(display_id, None)
        if display_id != self._display_id:
            return
        self._display_id = None
        if self._state is GuardState.COUNTING_DOWN:
            # The next tick repaints the status line.
            return
        if self._state is GuardState.COPIED_NO_TIMER:
            self._session = None
        self._state = GuardState.IDLE
        self._emit(ClipboardEvent(ClipboardEventKind.IDLE, ""))

    # --- task bookkeeping ---

    def _supersede(self) -> None:
        previous = self._session
        if previous is not None:
            self._cancel(previous.session_id)
            if previous.active:
                logger.debug("Session %d superseded", previous.session_id)
            previous.active = False
            self._session = None
        self._cancel(self._display_id)
        self._display_id = None

    def _schedule(self, key: int, seconds: float, callback: Callable[[], None]) -> None:
        self._cancel(key)
        self._tasks[key] = self.scheduler.call_later(seconds, callback)

    def _cancel(self, key: Optional[int]) -> None:
        if key is None:
            return
        task = self._tasks.pop(key, None)
        if task is not None:
            task.cancel()

    def _emit(self, event: ClipboardEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
