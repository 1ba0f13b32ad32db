import threading

import pytest

from dwfkit.errors import AcquisitionCancelled, AcquisitionTimeout
from dwfkit.wait import poll_until


def test_returns_final_status():
    statuses = iter([1, 1, 7, 2])
    assert poll_until(lambda: next(statuses), lambda s: s == 2) == 2


def test_timeout():
    with pytest.raises(AcquisitionTimeout):
        poll_until(lambda: 1, lambda s: s == 2, timeout=0.02, interval=0.005)


def test_zero_timeout_polls_once():
    calls = []

    def status():
        calls.append(1)
        return 0

    with pytest.raises(AcquisitionTimeout):
        poll_until(status, lambda s: False, timeout=0)
    assert len(calls) == 1


def test_cancel_before_first_poll():
    cancel = threading.Event()
    cancel.set()
    calls = []
    with pytest.raises(AcquisitionCancelled):
        poll_until(lambda: calls.append(1), lambda s: False, cancel=cancel)
    assert calls == []


def test_cancel_from_another_thread():
    cancel = threading.Event()
    timer = threading.Timer(0.02, cancel.set)
    timer.start()
    try:
        with pytest.raises(AcquisitionCancelled):
            poll_until(lambda: 0, lambda s: False, interval=0.005, cancel=cancel)
    finally:
        timer.cancel()


def test_status_errors_propagate():
    def status():
        raise RuntimeError("status failed")

    with pytest.raises(RuntimeError, match="status failed"):
        poll_until(status, lambda s: True, timeout=1)


def test_backoff_is_capped(monkeypatch):
    sleeps = []
    monkeypatch.setattr("dwfkit.wait.time.sleep", sleeps.append)
    statuses = iter([0, 0, 0, 0, 1])
    poll_until(
        lambda: next(statuses),
        lambda s: s == 1,
        interval=0.01,
        backoff=2.0,
        max_interval=0.03,
    )
    assert sleeps == pytest.approx([0.01, 0.02, 0.03, 0.03])
