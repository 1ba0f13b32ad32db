"""Polling helper used by the acquisition engines."""

import logging
import threading
import time
from typing import Any, Callable

from dwfkit.errors import AcquisitionCancelled, AcquisitionTimeout

logger = logging.getLogger(__name__)


def poll_until(
    status_fn: Callable[[], Any],
    done: Callable[[Any], bool],
    *,
    timeout: float | None = None,
    interval: float = 0.0,
    max_interval: float = 0.0,
    backoff: float = 1.0,
    cancel: threading.Event | None = None,
):
    """Call ``status_fn`` until ``done`` accepts its result.

    With the defaults this is a tight poll with no deadline. Exceptions
    raised by ``status_fn`` propagate unchanged.

    Args:
        status_fn: Zero-argument callable returning the current status.
        done: Predicate deciding whether a status is final.
        timeout: Seconds before giving up, None waits forever.
        interval: Initial sleep between polls in seconds.
        max_interval: Upper bound for the sleep once grown by ``backoff``,
            0 for no bound.
        backoff: Factor applied to the sleep after every poll.
        cancel: Event that aborts the wait when set.

    Returns:
        The final status.

    Raises:
        AcquisitionTimeout: If ``timeout`` elapsed first.
        AcquisitionCancelled: If ``cancel`` was set first.
    """
    deadline = None if timeout is None else time.monotonic() + timeout
    delay = interval
    polls = 0
    while True:
        if cancel is not None and cancel.is_set():
            raise AcquisitionCancelled(f"acquisition cancelled after {polls} polls")
        status = status_fn()
        polls += 1
        if done(status):
            logger.debug("Poll finished after %d polls with status %s", polls, status)
            return status
        if deadline is not None and time.monotonic() >= deadline:
            raise AcquisitionTimeout(
                f"acquisition not complete after {timeout} s (last status {status})"
            )
        if delay > 0:
            pause = delay
            if deadline is not None:
                pause = min(pause, max(deadline - time.monotonic(), 0.0))
            if cancel is not None:
                cancel.wait(pause)
            else:
                time.sleep(pause)
            delay *= backoff
            if max_interval > 0:
                delay = min(delay, max_interval)
