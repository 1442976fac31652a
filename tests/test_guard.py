"""Tests for the clipboard guard state machine."""

from __future__ import annotations

from spgen.errors import ClipboardClearError, ClipboardWriteError
from spgen.guard import ClipboardEventKind as Kind
from spgen.guard import ClipboardGuard, GuardState


def kinds(events):
    return [e.kind for e in events]


def ticks(events):
    return [e.seconds_remaining for e in events if e.kind is Kind.COUNTDOWN_TICK]


class TestCountdown:
    def test_copy_starts_countdown(self, guard, clipboard, events):
        assert guard.copy("s3cret")
        assert clipboard.text == "s3cret"
        assert kinds(events) == [Kind.SUCCESS, Kind.COUNTDOWN_TICK]
        assert events[1].seconds_remaining == 15
        assert guard.state is GuardState.COUNTING_DOWN
        assert guard.session.seconds_remaining == 15
        assert guard.session.auto_clear_enabled

    def test_one_tick_per_second_then_single_clear(self, guard, clipboard, scheduler, events):
        tick_times = []
        guard.subscribe(
            lambda e: tick_times.append(scheduler.now) if e.kind is Kind.COUNTDOWN_TICK else None
        )
        guard.copy("s3cret")
        scheduler.advance(14.5)
        assert clipboard.text == "s3cret"
        assert guard.session.seconds_remaining == 1

        scheduler.advance(0.5)
        assert ticks(events) == list(range(15, -1, -1))
        assert tick_times == [float(t) for t in range(16)]
        assert clipboard.writes == ["s3cret", ""]
        assert events[-1].kind is Kind.CLEARED
        assert guard.state is GuardState.CLEARED
        assert guard.session is None

        scheduler.advance(60)
        assert clipboard.writes == ["s3cret", ""]

    def test_cleared_reverts_to_idle_after_message(self, guard, scheduler, events):
        guard.copy("s3cret")
        scheduler.advance(15)
        scheduler.advance(2)
        assert guard.state is GuardState.CLEARED
        scheduler.advance(1)
        assert guard.state is GuardState.IDLE
        assert events[-1].kind is Kind.IDLE
        assert events[-1].message == ""
        assert guard.pending_tasks == 0

    def test_countdown_messages(self, guard, scheduler, events):
        guard.copy("s3cret")
        scheduler.advance(14)
        assert events[1].message == "Clipboard will auto-clear in 15 seconds"
        assert events[-1].message == "Clipboard will auto-clear in 1 second"

    def test_custom_countdown(self, clipboard, scheduler, events):
        guard = ClipboardGuard(clipboard, scheduler, clear_after=3, message_seconds=1)
        guard.subscribe(events.append)
        guard.copy("s3cret")
        scheduler.advance(3)
        assert ticks(events) == [3, 2, 1, 0]
        assert clipboard.writes == ["s3cret", ""]
        scheduler.advance(1)
        assert guard.state is GuardState.IDLE

    def test_zero_countdown_clears_immediately(self, clipboard, scheduler, events):
        guard = ClipboardGuard(clipboard, scheduler, clear_after=0)
        guard.subscribe(events.append)
        guard.copy("s3cret")
        assert ticks(events) == [0]
        assert clipboard.writes == ["s3cret", ""]


class TestSupersede:
    def test_second_copy_cancels_first_clearance(self, guard, clipboard, scheduler, events):
        guard.copy("first")
        first_id = guard.session.session_id
        scheduler.advance(5)
        guard.copy("second")
        assert guard.session.session_id != first_id
        assert guard.session.seconds_remaining == 15

        # The first secret's clearance would have fired at t=15.
        scheduler.advance(14.5)
        assert clipboard.writes == ["first", "second"]
        assert clipboard.text == "second"

        scheduler.advance(0.5)
        assert clipboard.writes == ["first", "second", ""]
        scheduler.advance(30)
        assert clipboard.writes.count("") == 1

    def test_superseded_ticks_stop(self, guard, scheduler, events):
        guard.copy("first")
        scheduler.advance(2)
        guard.copy("second")
        scheduler.advance(1)
        # 15, 14, 13 from the first session, then 15, 14 from the second.
        assert ticks(events) == [15, 14, 13, 15, 14]

    def test_only_one_clearance_outstanding(self, guard, scheduler):
        for secret in ("a", "b", "c"):
            guard.copy(secret)
            scheduler.advance(1)
            assert guard.pending_tasks == 1
            assert len(scheduler.pending()) == 1

    def test_copy_without_timer_cancels_countdown(self, guard, clipboard, scheduler):
        guard.copy("first")
        scheduler.advance(3)
        guard.copy("second", auto_clear=False)
        assert guard.state is GuardState.COPIED_NO_TIMER
        scheduler.advance(30)
        assert clipboard.writes == ["first", "second"]
        assert guard.state is GuardState.IDLE


class TestNoTimer:
    def test_copy_without_auto_clear(self, guard, clipboard, scheduler, events):
        assert guard.copy("s3cret", auto_clear=False)
        assert guard.state is GuardState.COPIED_NO_TIMER
        assert guard.session.auto_clear_enabled is False
        assert kinds(events) == [Kind.SUCCESS]

        scheduler.advance(3)
        assert guard.state is GuardState.IDLE
        assert guard.session is None
        assert kinds(events) == [Kind.SUCCESS, Kind.IDLE]
        assert clipboard.writes == ["s3cret"]

    def test_newer_message_is_not_blanked_by_older_expiry(self, guard, scheduler, events):
        guard.copy("a", auto_clear=False)
        scheduler.advance(2)
        guard.copy("b", auto_clear=False)
        scheduler.advance(2)
        assert Kind.IDLE not in kinds(events)
        scheduler.advance(1)
        assert kinds(events)[-1] is Kind.IDLE


class TestFailures:
    def test_copy_failure_reports_and_reverts(self, guard, clipboard, scheduler, events):
        clipboard.fail_on = lambda text: True
        assert guard.copy("s3cret") is False
        assert kinds(events) == [Kind.FAILURE]
        assert isinstance(events[0].error, ClipboardWriteError)
        assert guard.state is GuardState.IDLE
        assert guard.session is None

        scheduler.advance(3)
        assert kinds(events) == [Kind.FAILURE, Kind.IDLE]
        assert clipboard.attempts == ["s3cret"]

    def test_copy_failure_leaves_countdown_running(self, guard, clipboard, scheduler, events):
        guard.copy("first")
        session = guard.session
        scheduler.advance(4)

        clipboard.fail_on = lambda text: text == "second"
        assert guard.copy("second") is False
        assert guard.session is session
        assert guard.state is GuardState.COUNTING_DOWN

        scheduler.advance(3)
        # The failure message expiring must not interrupt the countdown.
        assert guard.state is GuardState.COUNTING_DOWN
        assert Kind.IDLE not in kinds(events)

        scheduler.advance(8)
        assert clipboard.writes == ["first", ""]
        assert guard.state is GuardState.CLEARED

    def test_clear_failure_is_a_warning_without_retry(self, guard, clipboard, scheduler, events):
        clipboard.fail_on = lambda text: text == ""
        guard.copy("s3cret")
        scheduler.advance(15)

        warning = events[-1]
        assert warning.kind is Kind.WARNING
        assert isinstance(warning.error, ClipboardClearError)
        assert isinstance(warning.error.__cause__, ClipboardWriteError)
        assert Kind.CLEARED not in kinds(events)
        assert guard.state is GuardState.IDLE
        assert guard.session is None

        scheduler.advance(60)
        assert clipboard.attempts == ["s3cret", ""]
        assert ticks(events)[-1] == 0
        assert kinds(events)[-1] is Kind.IDLE
        assert guard.pending_tasks == 0


class TestClose:
    def test_close_during_countdown_clears_now(self, guard, clipboard, scheduler, events):
        guard.copy("s3cret")
        scheduler.advance(5)
        guard.close()
        assert clipboard.writes == ["s3cret", ""]
        assert events[-1].kind is Kind.CLEARED
        assert guard.state is GuardState.IDLE
        assert guard.pending_tasks == 0
        assert scheduler.pending() == []

        scheduler.advance(30)
        assert clipboard.writes == ["s3cret", ""]

    def test_close_without_countdown_leaves_clipboard(self, guard, clipboard, scheduler):
        guard.copy("s3cret", auto_clear=False)
        guard.close()
        assert clipboard.writes == ["s3cret"]
        assert scheduler.pending() == []

    def test_close_clear_failure_warns(self, guard, clipboard, events):
        guard.copy("s3cret")
        clipboard.fail_on = lambda text: text == ""
        guard.close()
        assert events[-1].kind is Kind.WARNING
        assert isinstance(events[-1].error, ClipboardClearError)


def test_unsubscribe(guard, events):
    seen = []
    unsubscribe = guard.subscribe(seen.append)
    unsubscribe()
    unsubscribe()
    guard.copy("s3cret")
    assert seen == []
    assert len(events) == 2
