"""Conversion of JUnit durations into TestRail elapsed times."""

import math
import re
from decimal import ROUND_HALF_UP, Decimal

# Leading numeric prefix, the way the test harness writes and reads times
NUMBER_PREFIX = re.compile(r"\s*[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")

# TestRail rejects "0s"
MIN_ELAPSED_SECONDS = 1


def parse_seconds(seconds: str) -> float:
    """Parse the leading number of a duration string, 0.0 when there is none."""
    match = NUMBER_PREFIX.match(seconds)
    if match is None:
        return 0.0

    value = float(match.group())
    if not math.isfinite(value):
        return 0.0
    return value


def make_testrail_time(seconds: str) -> str:
    """Return an elapsed time string TestRail accepts.

    The duration is rounded to the nearest second, halves away from zero,
    and never goes below one second.

    >>> make_testrail_time("2.34")
    '2s'
    """
    rounded = Decimal(parse_seconds(seconds)).to_integral_value(
        rounding=ROUND_HALF_UP
    )
    return f"{max(int(rounded), MIN_ELAPSED_SECONDS)}s"
