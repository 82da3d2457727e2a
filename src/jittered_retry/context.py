"""Cancellation tokens passed down the call chain.

A Context carries a "done" signal plus the error that fired it. Deadlines are
checked lazily: ``err()`` and ``wait()`` compare against ``time.monotonic()``,
so no timer thread is ever started.
"""

from __future__ import annotations

import threading
import time
from datetime import datetime, timezone
from typing import Optional, Union

from .durations import Duration, to_nanoseconds, to_seconds
from .errors import Canceled, ContextError, DeadlineExceeded


_MAX_WAIT_CHUNK = min(threading.TIMEOUT_MAX, 86400.0)


class Context:
    def __init__(self, parent: Optional["Context"] = None, deadline: Optional[float] = None) -> None:
        self._parent = parent
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._err: Optional[ContextError] = None
        self._children: set[Context] = set()

        if parent is not None and parent.deadline is not None:
            deadline = parent.deadline if deadline is None else min(deadline, parent.deadline)
        self._deadline = deadline

        if parent is not None:
            parent_err = parent.err()
            if parent_err is not None:
                self._fire(parent_err)
            else:
                parent._add_child(self)

    def __enter__(self) -> "Context":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()

    def __repr__(self) -> str:
        return f"Context(deadline={self._deadline!r}, err={self._err!r})"

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    def err(self) -> Optional[ContextError]:
        if self._err is None and self._deadline is not None and time.monotonic() >= self._deadline:
            self._fire(DeadlineExceeded())
        return self._err

    def done(self) -> bool:
        return self.err() is not None

    def wait(self, timeout: Optional[float] = None) -> Optional[ContextError]:
        """Block until the token fires or ``timeout`` seconds pass.

        Returns ``err()``, so ``None`` means the full timeout elapsed on a live
        token.
        """
        if self._deadline is not None:
            remaining = max(0.0, self._deadline - time.monotonic())
            timeout = remaining if timeout is None else min(timeout, remaining)
        if timeout is None:
            self._done.wait()
            return self.err()

        # Event.wait rejects timeouts past the platform limit; wait in chunks.
        end = time.monotonic() + timeout
        while not self._done.is_set():
            remaining = end - time.monotonic()
            if remaining <= 0:
                break
            self._done.wait(min(remaining, _MAX_WAIT_CHUNK))
        return self.err()

    def cancel(self) -> None:
        self._fire(Canceled())

    def _add_child(self, child: "Context") -> None:
        with self._lock:
            if self._err is None:
                self._children.add(child)
                return
            err = self._err
        child._fire(err)

    def _remove_child(self, child: "Context") -> None:
        with self._lock:
            self._children.discard(child)

    def _fire(self, err: ContextError) -> None:
        with self._lock:
            if self._err is not None:
                return
            self._err = err
            children = list(self._children)
            self._children.clear()
            self._done.set()

        for child in children:
            child._fire(err)
        if self._parent is not None:
            self._parent._remove_child(self)


def background() -> Context:
    """Root token: never fires unless cancelled explicitly."""
    return Context()


def with_cancel(parent: Context) -> Context:
    return Context(parent)


def with_deadline(parent: Context, deadline: Union[float, datetime]) -> Context:
    """Child token expiring at ``deadline``.

    Floats are ``time.monotonic()`` readings; datetimes are wall-clock and
    converted against the current time (naive values are taken as local time).
    """
    if isinstance(deadline, datetime):
        now = datetime.now(timezone.utc) if deadline.tzinfo is not None else datetime.now()
        deadline = time.monotonic() + (deadline - now).total_seconds()
    return Context(parent, deadline=deadline)


def with_timeout(parent: Context, timeout: Duration) -> Context:
    return with_deadline(parent, time.monotonic() + to_seconds(to_nanoseconds(timeout)))
