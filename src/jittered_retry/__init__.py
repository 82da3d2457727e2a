"""Retry fallible calls with jittered capped exponential backoff.

The top-level ``retry_call``/``retry_call_if`` use a 1s initial and 30s max
ceiling; build a ``Retrier`` with ``new`` for other values. Pass a ``Context``
to bound the whole run with a deadline or to cancel it from elsewhere.
"""

from .classifiers import always_retry, is_transient_http_error, never_retry, retry_on
from .config import RetrierConfig, load_retrier_config, retrier_from_dict
from .context import Context, background, with_cancel, with_deadline, with_timeout
from .durations import parse_duration, to_nanoseconds
from .errors import Canceled, ContextError, DeadlineExceeded
from .logging_utils import setup_logging
from .retry import DEFAULT_RETRIER, Retrier, jitter, new, retry_call, retry_call_if

__all__ = [
    "Canceled",
    "Context",
    "ContextError",
    "DEFAULT_RETRIER",
    "DeadlineExceeded",
    "Retrier",
    "RetrierConfig",
    "always_retry",
    "background",
    "is_transient_http_error",
    "jitter",
    "load_retrier_config",
    "never_retry",
    "new",
    "parse_duration",
    "retrier_from_dict",
    "retry_call",
    "retry_call_if",
    "retry_on",
    "setup_logging",
    "to_nanoseconds",
    "with_cancel",
    "with_deadline",
    "with_timeout",
]
