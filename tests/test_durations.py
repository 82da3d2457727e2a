from datetime import timedelta

import pytest

from jittered_retry.durations import (
    MAX_DURATION_NS,
    MIN_DURATION_NS,
    coerce_duration,
    parse_duration,
    to_nanoseconds,
)


def test_to_nanoseconds():
    assert to_nanoseconds(1) == 1_000_000_000
    assert to_nanoseconds(0.25) == 250_000_000
    assert to_nanoseconds(-1) == -1_000_000_000
    assert to_nanoseconds(timedelta(milliseconds=3)) == 3_000_000
    assert to_nanoseconds(timedelta(days=1)) == 86_400 * 1_000_000_000


def test_to_nanoseconds_rejects_non_durations():
    with pytest.raises(TypeError):
        to_nanoseconds("1s")
    with pytest.raises(TypeError):
        to_nanoseconds(True)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("0", 0),
        ("250ms", 250_000_000),
        ("1.5s", 1_500_000_000),
        ("1m30s", 90_000_000_000),
        ("2h", 7_200_000_000_000),
        ("10us", 10_000),
        ("10µs", 10_000),
        ("7ns", 7),
        ("-1s", -1_000_000_000),
    ],
)
def test_parse_duration(text, expected):
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "1", "abc", "1x", "s", "1s junk"])
def test_parse_duration_invalid(text):
    with pytest.raises(ValueError):
        parse_duration(text)


def test_coerce_duration():
    assert coerce_duration("1s") == coerce_duration(1) == coerce_duration(timedelta(seconds=1))


def test_to_nanoseconds_saturates():
    assert to_nanoseconds(float("inf")) == MAX_DURATION_NS
    assert to_nanoseconds(float("-inf")) == MIN_DURATION_NS
    assert to_nanoseconds(1e300) == MAX_DURATION_NS
    assert to_nanoseconds(10**30) == MAX_DURATION_NS
    assert to_nanoseconds(timedelta.max) == MAX_DURATION_NS
    assert to_nanoseconds(float("nan")) == 0
