from __future__ import annotations

import re
from datetime import timedelta
from typing import Annotated

from pydantic import BeforeValidator

# Human-readable durations such as "2s", "500ms", "1m 30s" or "1h30m".
_PART = re.compile(r"(\d+)\s*([a-zA-Zµ]+)")

_NS_PER_US = 1_000
_UNITS: dict[str, int] = {}
for _names, _nanos in (
    (("ns", "nsec", "nanos"), 1),
    (("us", "µs", "usec", "micros"), _NS_PER_US),
    (("ms", "msec", "millis"), 1_000_000),
    (("s", "sec", "secs", "second", "seconds"), 1_000_000_000),
    (("m", "min", "mins", "minute", "minutes"), 60 * 1_000_000_000),
    (("h", "hr", "hrs", "hour", "hours"), 3_600 * 1_000_000_000),
    (("d", "day", "days"), 86_400 * 1_000_000_000),
    (("w", "week", "weeks"), 7 * 86_400 * 1_000_000_000),
):
    for _name in _names:
        _UNITS[_name] = _nanos


def parse_duration(text: object) -> timedelta:
    if isinstance(text, timedelta):
        return text
    if not isinstance(text, str):
        raise ValueError(f"duration must be a string like '2s', got {text!r}")

    stripped = text.strip()
    if not stripped:
        raise ValueError("duration must not be empty")

    total_ns = 0
    pos = 0
    for match in _PART.finditer(stripped):
        # Parts must be contiguous apart from whitespace.
        if stripped[pos:match.start()].strip():
            raise ValueError(f"invalid duration {text!r}")
        number, unit = match.groups()
        scale = _UNITS.get(unit)
        if scale is None:
            raise ValueError(f"unknown time unit {unit!r} in duration {text!r}")
        total_ns += int(number) * scale
        pos = match.end()

    if pos == 0 or stripped[pos:].strip():
        raise ValueError(f"invalid duration {text!r}")
    return timedelta(microseconds=total_ns / _NS_PER_US)


DurationField = Annotated[timedelta, BeforeValidator(parse_duration)]
