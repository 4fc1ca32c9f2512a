"""Go-style duration strings ("30m", "1h15s", "1.5h", "250ms")."""

import re
from datetime import timedelta

# Nanoseconds per unit
_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration string into a timedelta.

    A duration is an optionally signed sequence of decimal numbers, each with
    an optional fraction and a unit suffix. "0" on its own is also accepted.
    Precision below a microsecond is rounded away only once the whole string
    has been added up. Raises ValueError for anything else.
    """
    if not isinstance(value, str) or not value:
        raise ValueError(f"invalid duration {value!r}")

    text = value
    sign = 1
    if text[0] in "+-":
        sign = -1 if text[0] == "-" else 1
        text = text[1:]

    if text == "0":
        return timedelta(0)

    total_ns = 0.0
    pos = 0
    while pos < len(text):
        match = _COMPONENT.match(text, pos)
        if not match:
            raise ValueError(f"invalid duration {value!r}")
        number, unit = match.groups()
        total_ns += float(number) * _UNITS[unit]
        pos = match.end()

    if pos == 0:
        raise ValueError(f"invalid duration {value!r}")
    return timedelta(microseconds=sign * total_ns / 1000)


def is_valid_duration(value: str) -> bool:
    try:
        parse_duration(value)
    except ValueError:
        return False
    return True
