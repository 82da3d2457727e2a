from __future__ import annotations

import math
import re
from datetime import timedelta
from typing import Union

Duration = Union[int, float, timedelta]

NANOSECONDS_PER_SECOND = 1_000_000_000

# Longest representable duration; larger values saturate here.
MAX_DURATION_NS = 2**63 - 1
MIN_DURATION_NS = -(2**63)

_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "ms": 1_000_000,
    "s": NANOSECONDS_PER_SECOND,
    "m": 60 * NANOSECONDS_PER_SECOND,
    "h": 3600 * NANOSECONDS_PER_SECOND,
}

_PART_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def saturate(ns: int) -> int:
    return max(MIN_DURATION_NS, min(MAX_DURATION_NS, ns))


def to_nanoseconds(value: Duration) -> int:
    """Normalize seconds (int/float) or a timedelta to integer nanoseconds.

    Results saturate at +/- MAX_DURATION_NS; infinities map to the bounds and
    NaN to zero.
    """
    if isinstance(value, timedelta):
        whole = (value.days * 86400 + value.seconds) * NANOSECONDS_PER_SECOND
        return saturate(whole + value.microseconds * 1_000)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected seconds or timedelta, got {type(value).__name__}")
    if isinstance(value, int):
        return saturate(value * NANOSECONDS_PER_SECOND)
    ns = value * NANOSECONDS_PER_SECOND
    if math.isnan(ns):
        return 0
    if math.isinf(ns):
        return MAX_DURATION_NS if ns > 0 else MIN_DURATION_NS
    return saturate(int(round(ns)))


def to_seconds(ns: int) -> float:
    return ns / NANOSECONDS_PER_SECOND


def parse_duration(text: str) -> int:
    """Parse strings like "250ms", "1.5s" or "1m30s" into nanoseconds.

    A bare "0" is accepted; anything else needs a unit on every part.
    """
    s = text.strip()
    sign = 1
    if s[:1] in {"+", "-"}:
        if s[0] == "-":
            sign = -1
        s = s[1:]
    if s == "0":
        return 0
    if not s:
        raise ValueError(f"invalid duration: {text!r}")

    total = 0
    pos = 0
    for m in _PART_RE.finditer(s):
        if m.start() != pos:
            raise ValueError(f"invalid duration: {text!r}")
        number, unit = m.group(1), m.group(2)
        total += int(round(float(number) * _UNITS[unit]))
        pos = m.end()
    if pos != len(s):
        raise ValueError(f"invalid duration: {text!r}")
    return saturate(sign * total)


def coerce_duration(value: Union[Duration, str]) -> int:
    if isinstance(value, str):
        return parse_duration(value)
    return to_nanoseconds(value)
