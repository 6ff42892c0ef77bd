"""Cooperative cancellation shared between a caller and a running search."""

from __future__ import annotations

import threading

from ..logging_utils import get_logger

logger = get_logger()


class AbortLock:
    """One-way running -> aborted flag, polled by the search at every step.

    Safe to set from another thread (e.g. a UI thread); once aborted it stays
    aborted, so a fresh lock is needed for the next request.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    @classmethod
    def prepare(cls) -> "AbortLock":
        return cls()

    def abort(self) -> None:
        if not self._event.is_set():
            logger.debug("abort requested")
        self._event.set()

    def is_aborted(self) -> bool:
        return self._event.is_set()

    def abort_after(self, seconds: float) -> threading.Timer:
        """Start a daemon timer that aborts this lock after ``seconds``.

        The caller may ``cancel()`` the returned timer once the search is done.
        """
        timer = threading.Timer(seconds, self.abort)
        timer.daemon = True
        timer.start()
        return timer

    def __repr__(self) -> str:
        state = "aborted" if self.is_aborted() else "running"
        return f"<AbortLock {state}>"
