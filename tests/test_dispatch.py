"""
Tests for the main-context dispatchers (dayplan/utils/dispatch.py).
"""

import threading

from dayplan.utils.dispatch import InlineDispatcher, QueueDispatcher


def test_inline_dispatch_runs_immediately():
    seen = []
    InlineDispatcher().dispatch(seen.append, 1)
    assert seen == [1]


def test_queue_dispatch_runs_on_drain_in_order():
    dispatcher = QueueDispatcher()
    seen = []
    for i in range(3):
        t = threading.Thread(target=dispatcher.dispatch, args=(seen.append, i))
        t.start()
        t.join()

    assert seen == []
    assert dispatcher.pending() == 3
    assert dispatcher.drain() == 3
    assert seen == [0, 1, 2]


def test_run_until_drains_work_posted_later():
    dispatcher = QueueDispatcher()
    done = []
    timer = threading.Timer(0.05, dispatcher.dispatch, args=(done.append, True))
    timer.start()

    assert dispatcher.run_until(lambda: bool(done), timeout=5, interval=0.01)
    timer.join()


def test_run_until_times_out_and_calls_idle():
    dispatcher = QueueDispatcher()
    idle_calls = []

    assert dispatcher.run_until(lambda: False, timeout=0.05,
                                idle=idle_calls.append, interval=0.01) is False
    assert idle_calls
    assert all(seconds == 0.01 for seconds in idle_calls)
