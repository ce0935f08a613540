"""Cancellation contexts threaded through every client call."""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional


class Context:
    """Cancellation signal and optional deadline for one or more calls.

    Contexts form a tree: cancelling a parent cancels every context derived
    from it, and a child's deadline never exceeds its parent's. Deadlines are
    ``time.monotonic()`` values.

    Use as a context manager to cancel on exit::

        with Context.background().with_timeout(5) as ctx:
            client.tags.list(ctx=ctx)
    """

    def __init__(
        self,
        *,
        parent: Optional["Context"] = None,
        deadline: Optional[float] = None,
    ) -> None:
        if parent is not None and parent.deadline is not None:
            deadline = parent.deadline if deadline is None else min(deadline, parent.deadline)
        self._deadline = deadline
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: list[Callable[[], None]] = []
        self._detach: Optional[Callable[[], None]] = None
        if parent is not None:
            self._detach = parent.add_cancel_callback(self.cancel)

    @classmethod
    def background(cls) -> "Context":
        """Return a root context that is never cancelled and has no deadline."""
        return cls()

    def with_cancel(self) -> "Context":
        return Context(parent=self)

    def with_deadline(self, deadline: float) -> "Context":
        return Context(parent=self, deadline=deadline)

    def with_timeout(self, seconds: float) -> "Context":
        return Context(parent=self, deadline=time.monotonic() + seconds)

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def done(self) -> bool:
        return self.cancelled or self.expired

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, ``None`` without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def cancel(self) -> None:
        """Cancel this context and all of its children. Idempotent."""
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
            detach, self._detach = self._detach, None
        if detach is not None:
            detach()
        for callback in callbacks:
            callback()

    def add_cancel_callback(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Run ``callback`` once on cancellation.

        Runs immediately when the context is already cancelled. Returns a
        function that unregisters the callback.
        """
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return lambda: self._remove_callback(callback)
        callback()
        return lambda: None

    def _remove_callback(self, callback: Callable[[], None]) -> None:
        with self._lock:
            try:
                self._callbacks.remove(callback)
            except ValueError:
                pass

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled, the deadline passes or ``timeout`` elapses.

        Returns ``True`` when the context is done.
        """
        limit = None if timeout is None else time.monotonic() + timeout
        if self._deadline is not None:
            limit = self._deadline if limit is None else min(limit, self._deadline)
        while not self._event.is_set():
            if limit is None:
                self._event.wait()
                break
            left = limit - time.monotonic()
            if left <= 0:
                break
            self._event.wait(left)
        return self.done()

    def __enter__(self) -> "Context":
        return self

    def __exit__(self, *_exc) -> None:
        self.cancel()

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "expired" if self.expired else "active"
        return f"Context({state}, remaining={self.remaining()!r})"


__all__ = ["Context"]
