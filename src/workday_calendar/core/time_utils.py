"""
Clock time arithmetic.

Pure functions over (hour, minute) tuples and minute counts.
"""

from typing import Tuple


HOURS_IN_DAY = 24
MINUTES_IN_HOUR = 60
MINUTES_IN_DAY = MINUTES_IN_HOUR * HOURS_IN_DAY

ClockTime = Tuple[int, int]


def convert_to_minutes(time_value: ClockTime) -> int:
    """Convert an (hour, minute) tuple to minutes since midnight."""
    hours, minutes = time_value
    return hours * MINUTES_IN_HOUR + minutes


def add_minutes(left: int, right: int) -> ClockTime:
    """
    Add two minute counts.

    No 24h wraparound is applied; day boundaries are the caller's concern.
    """
    total = left + right
    return total // MINUTES_IN_HOUR, total % MINUTES_IN_HOUR


def subtract_minutes(larger: int, smaller: int) -> ClockTime:
    """
    Subtract two minute counts, wrapping backward across midnight.

    Args:
        larger: Minuend in minutes.
        smaller: Subtrahend in minutes.

    Returns:
        The difference as (hour, minute), within a 24h day.
    """
    diff = larger - smaller
    if diff < 0:
        diff += MINUTES_IN_DAY
    return diff // MINUTES_IN_HOUR, diff % MINUTES_IN_HOUR


def add_time(left: ClockTime, right: ClockTime) -> ClockTime:
    return add_minutes(convert_to_minutes(left), convert_to_minutes(right))


def subtract_time(larger: ClockTime, smaller: ClockTime) -> ClockTime:
    """Clock time difference, e.g. a stop time minus a start time."""
    return subtract_minutes(convert_to_minutes(larger), convert_to_minutes(smaller))
