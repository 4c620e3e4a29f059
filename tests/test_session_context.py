from __future__ import annotations

import threading

from smart_converter.core.session_context import SessionContext


def test_history_keeps_the_most_recent_exchanges():
    context = SessionContext(max_history_exchanges=2)
    for i in range(3):
        context.add_exchange(f"q{i}", f"a{i}")

    assert [m.content for m in context.snapshot()] == ["q1", "a1", "q2", "a2"]
    assert context.recent_messages()[0] == {"role": "user", "content": "q1"}


def test_zero_exchanges_keeps_no_history():
    context = SessionContext(max_history_exchanges=0)
    context.add_exchange("q", "a")
    assert context.snapshot() == []


def test_concurrent_exchanges_stay_paired_and_bounded():
    context = SessionContext(max_history_exchanges=5)
    start = threading.Barrier(8)

    def worker(n: int) -> None:
        start.wait()
        for i in range(200):
            context.add_exchange(f"q{n}-{i}", f"a{n}-{i}")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    history = context.snapshot()
    assert len(history) == 10
    for user, model in zip(history[::2], history[1::2]):
        assert (user.role, model.role) == ("user", "model")
        assert model.content == "a" + user.content[1:]


def test_clear_history():
    context = SessionContext()
    context.add_exchange("q", "a")
    context.clear_history()
    assert context.recent_messages() == []
