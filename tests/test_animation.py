"""Tests for the run loop, animator and animated keep batches."""

import pytest

from conftest import pin
from keeplayout import DisconnectedHierarchyError, Rect, UnsatisfiableConstraintsError, View
from keeplayout.animation import (
    AnimatedBatch,
    AnimationOptions,
    Animator,
    BatchState,
    RunLoop,
    Timeline,
    Transition,
    ease,
    get_main_loop,
    schedule_batch,
)


class TestRunLoop:
    def test_zero_delay_never_runs_inline(self):
        loop = RunLoop()
        calls = []
        loop.call_later(0, calls.append, "a")
        assert calls == []
        assert loop.advance() == 1
        assert calls == ["a"]

    def test_equal_deadlines_fire_in_schedule_order(self):
        loop = RunLoop()
        calls = []
        loop.call_later(0.5, calls.append, "first")
        loop.call_soon(calls.append, "soon")
        loop.call_later(0.5, calls.append, "second")
        loop.advance(0.5)
        assert calls == ["soon", "first", "second"]
        assert loop.time == 0.5

    def test_timers_scheduled_during_advance(self):
        loop = RunLoop()
        calls = []

        def outer():
            calls.append("outer")
            loop.call_later(0.25, calls.append, "inner")

        loop.call_later(0.25, outer)
        loop.advance(0.5)
        assert calls == ["outer", "inner"]

    def test_advance_stops_at_target(self):
        loop = RunLoop()
        calls = []
        loop.call_later(1.0, calls.append, "late")
        loop.advance(0.5)
        assert calls == []
        assert loop.pending == 1
        assert loop.next_deadline == 1.0

    def test_run_until_idle(self):
        loop = RunLoop()
        calls = []
        loop.call_later(2.0, calls.append, 2)
        loop.call_later(1.0, calls.append, 1)
        assert loop.run_until_idle() == 2
        assert calls == [1, 2]
        assert loop.time == 2.0
        assert loop.pending == 0

    def test_runaway_rescheduling_is_reported(self):
        loop = RunLoop()

        def again():
            loop.call_soon(again)

        loop.call_soon(again)
        with pytest.raises(RuntimeError):
            loop.run_until_idle(max_callbacks=10)

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            RunLoop().call_later(-1, print)

    def test_main_loop_fixture(self, run_loop):
        assert get_main_loop() is run_loop
        assert isinstance(run_loop, Timeline)


class TestAnimator:
    def test_ease_curves(self):
        assert ease(0.5, AnimationOptions.CURVE_LINEAR) == pytest.approx(0.5)
        assert ease(0.5, AnimationOptions.CURVE_EASE_IN) == pytest.approx(0.25)
        assert ease(0.5, AnimationOptions.CURVE_EASE_OUT) == pytest.approx(0.75)
        assert ease(0.5) == pytest.approx(0.5)
        assert ease(2.0) == 1.0
        assert ease(-1.0) == 0.0

    def test_transition_interpolates_frames(self):
        transition = Transition(View("v"), Rect(0, 0, 10, 10), Rect(100, 50, 30, 10))
        frame = transition.frame_at(0.5, AnimationOptions.CURVE_LINEAR)
        assert (frame.x, frame.y, frame.width, frame.height) == pytest.approx((50, 25, 20, 10))
        assert transition.frame_at(1.0) == Rect(100, 50, 30, 10)

    def test_transaction_captures_changed_frames(self, root):
        loop = RunLoop()
        a = root.add_subview(View("a", frame=Rect(0, 0, 10, 10)))
        b = root.add_subview(View("b", frame=Rect(0, 0, 10, 10)))
        finished = []

        def body():
            a.frame = Rect(5, 5, 10, 10)

        transaction = Animator(loop).animate(root, 0.25, body, completion=finished.append)
        assert [t.view for t in transaction.transitions] == [a]
        assert transaction.transitions[0].start == Rect(0, 0, 10, 10)
        assert b.frame == Rect(0, 0, 10, 10)
        assert not transaction.finished

        loop.advance(0.25)
        assert transaction.finished
        assert finished == [True]


class TestAnimatedBatch:
    def test_lifecycle(self, root, run_loop):
        view = root.add_subview(View("view"))
        pin(view, 0, 0, 50, 20)
        root.layout_if_needed()
        states = []

        batch = view.keep_animated(
            0.25,
            lambda: view.keep_width().set_value(120),
            completion=lambda finished: states.append((batch.state, finished)),
        )
        assert batch.state is BatchState.PENDING
        assert view.frame.width == pytest.approx(50)

        run_loop.advance()
        assert batch.state is BatchState.RUNNING
        assert view.frame.width == pytest.approx(120)
        transition = batch.transaction.transitions[0]
        assert transition.view is view
        assert transition.start.width == pytest.approx(50)
        assert transition.end.width == pytest.approx(120)
        assert states == []

        run_loop.advance(0.25)
        assert batch.state is BatchState.COMPLETED
        assert states == [(BatchState.COMPLETED, True)]

        run_loop.run_until_idle()
        assert len(states) == 1

    def test_delay_defers_the_mutations(self, root, run_loop):
        view = root.add_subview(View("view"))
        pin(view, 0, 0, 50, 20)
        root.layout_if_needed()
        ran = []

        def layout():
            ran.append(run_loop.time)
            view.keep_left_inset().set_value(30)

        batch = view.keep_animated(0.5, layout, delay=0.25)
        run_loop.advance(0.125)
        assert ran == []
        assert batch.state is BatchState.PENDING

        run_loop.advance(0.125)
        assert ran == [0.25]
        assert view.frame.x == pytest.approx(30)

        run_loop.advance(0.5)
        assert batch.state is BatchState.COMPLETED

    def test_batches_run_in_schedule_order(self, root):
        loop = RunLoop()
        view = root.add_subview(View("view"))
        order = []
        first = AnimatedBatch(view, 0.0, [lambda: order.append("first")])
        second = AnimatedBatch(view, 0.0, [lambda: order.append("second")])
        schedule_batch(first, loop)
        schedule_batch(second, loop)
        loop.run_until_idle()
        assert order == ["first", "second"]
        assert first.state is second.state is BatchState.COMPLETED

    def test_mutations_run_in_order(self, root):
        loop = RunLoop()
        view = root.add_subview(View("view"))
        order = []
        batch = AnimatedBatch(view, 0.0)

        @batch.add
        def one():
            order.append(1)

        batch.add(lambda: order.append(2))
        schedule_batch(batch, loop)
        loop.advance()
        assert order == [1, 2]

    def test_batch_schedules_once(self, root):
        loop = RunLoop()
        batch = AnimatedBatch(root, 0.1)
        schedule_batch(batch, loop)
        with pytest.raises(ValueError):
            schedule_batch(batch, loop)
        with pytest.raises(ValueError):
            batch.add(lambda: None)

    def test_failing_mutation_completes_unfinished(self, root, run_loop):
        view = root.add_subview(View("view"))
        stranger = View("stranger")
        results = []

        batch = view.keep_animated(
            0.25,
            lambda: view.keep_left_align_to(stranger).set_value(1),
            completion=results.append,
        )
        with pytest.raises(DisconnectedHierarchyError):
            run_loop.run_until_idle()
        assert batch.state is BatchState.COMPLETED
        assert results == [False]

        run_loop.run_until_idle()
        assert results == [False]

    def test_unsatisfiable_layout_completes_unfinished(self, root, run_loop):
        view = root.add_subview(View("view"))
        results = []

        def layout():
            view.keep_width().set_value(10)
            view.keep_width("min").set_value(20)

        batch = view.keep_animated(0.25, layout, completion=results.append)
        with pytest.raises(UnsatisfiableConstraintsError):
            run_loop.advance()
        assert batch.state is BatchState.COMPLETED
        assert batch.transaction is None
        assert results == [False]

    def test_invalid_timing_rejected(self, root):
        with pytest.raises(ValueError):
            AnimatedBatch(root, -1.0)
        with pytest.raises(ValueError):
            AnimatedBatch(root, 0.1, delay=-0.5)

    def test_explicit_timeline_overrides_main_loop(self, root, run_loop):
        other = RunLoop()
        view = root.add_subview(View("view"))
        batch = view.keep_animated(0.0, lambda: None, timeline=other)
        run_loop.run_until_idle()
        assert batch.state is BatchState.PENDING
        other.run_until_idle()
        assert batch.state is BatchState.COMPLETED
