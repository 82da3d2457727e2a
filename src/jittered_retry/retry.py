"""Jittered capped exponential backoff.

The wait before retry ``n`` is drawn uniformly from ``[0, d)`` where ``d`` starts
at ``initial`` and doubles every retry, capped at ``max`` ("Full Jitter").
Retries stop when the call succeeds, the classifier rejects the error, or the
context fires.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, TypeVar

from .classifiers import always_retry
from .context import Context
from .durations import Duration, saturate, to_nanoseconds, to_seconds


logger = logging.getLogger(__name__)

T = TypeVar("T")


def jitter(d: int, rng: Optional[random.Random] = None) -> int:
    """Return a random wait in ``[0, d)`` nanoseconds."""
    if d <= 0:
        return 0
    if rng is None:
        return random.randrange(d)
    return rng.randrange(d)


@dataclass(frozen=True)
class Retrier:
    initial_ns: int
    max_ns: int
    rng: Optional[Any] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        initial_ns = max(1, saturate(int(self.initial_ns)))
        object.__setattr__(self, "initial_ns", initial_ns)
        object.__setattr__(self, "max_ns", max(initial_ns, saturate(int(self.max_ns))))

    @property
    def initial(self) -> float:
        return to_seconds(self.initial_ns)

    @property
    def max(self) -> float:
        return to_seconds(self.max_ns)

    def call(self, ctx: Context, fn: Callable[[], T]) -> T:
        """Call ``fn`` until it succeeds or ``ctx`` fires."""
        return self.call_if(ctx, fn, always_retry)

    def call_if(self, ctx: Context, fn: Callable[[], T], should_retry: Callable[[Exception], bool]) -> T:
        """Call ``fn`` until it succeeds, raises a non-retryable error, or ``ctx`` fires.

        Errors raised by ``fn`` and the context's error are raised as-is. If the
        context has already fired, ``fn`` is not called.
        """
        err = ctx.err()
        if err is not None:
            raise err

        try:
            return fn()
        except Exception as exc:  # noqa: BLE001
            if not should_retry(exc):
                raise
            logger.debug("Attempt 1 failed (%s); backing off", exc)

        d = self.initial_ns
        attempt = 1
        while True:
            w = jitter(d, self.rng)
            logger.debug("Waiting %.6fs before attempt %d (ceiling %.6fs)", to_seconds(w), attempt + 1, to_seconds(d))
            err = ctx.wait(to_seconds(w))
            if err is not None:
                logger.debug("Retry stopped after %d attempts: %s", attempt, err)
                raise err

            attempt += 1
            try:
                return fn()
            except Exception as exc:  # noqa: BLE001
                if not should_retry(exc):
                    raise
                logger.debug("Attempt %d failed (%s); backing off", attempt, exc)
            d = min(d * 2, self.max_ns)


def new(initial: Duration, max: Duration, rng: Optional[random.Random] = None) -> Retrier:
    """Build a Retrier from durations in seconds or timedeltas.

    If initial is below one nanosecond it becomes one nanosecond; if max is
    below initial it becomes initial.
    """
    return Retrier(to_nanoseconds(initial), to_nanoseconds(max), rng=rng)


DEFAULT_RETRIER = new(1, 30)


def retry_call(ctx: Context, fn: Callable[[], T]) -> T:
    """Retry ``fn`` with the default 1s initial / 30s max ceilings."""
    return DEFAULT_RETRIER.call(ctx, fn)


def retry_call_if(ctx: Context, fn: Callable[[], T], should_retry: Callable[[Exception], bool]) -> T:
    return DEFAULT_RETRIER.call_if(ctx, fn, should_retry)
