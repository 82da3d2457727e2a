from __future__ import annotations

from typing import Callable

import requests


RETRYABLE_STATUS = frozenset({408, 425, 429})


def always_retry(exc: Exception) -> bool:
    return True


def never_retry(exc: Exception) -> bool:
    return False


def retry_on(*exc_types: type[BaseException]) -> Callable[[Exception], bool]:
    """Classifier that retries only instances of ``exc_types``."""

    def _should_retry(exc: Exception) -> bool:
        return isinstance(exc, exc_types)

    return _should_retry


def is_transient_http_error(exc: Exception) -> bool:
    """Retry network errors, timeouts, 408/425/429 and 5xx responses from requests."""
    if isinstance(exc, (requests.Timeout, requests.ConnectionError)):
        return True
    if isinstance(exc, requests.HTTPError):
        resp = exc.response
        if resp is None:
            return True
        return resp.status_code in RETRYABLE_STATUS or resp.status_code >= 500
    return False
