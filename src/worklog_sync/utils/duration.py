"""Parsing of Jira/Tempo duration strings such as ``1w 2d 3h 30m``."""

import re

# Jira timesheets count a working day as 5 hours and a working week as
# 5 days. These are the tracker's field semantics, not calendar units.
WORKDAY_HOURS = 5
WORKDAYS_PER_WEEK = 5

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_WORKDAY = WORKDAY_HOURS * SECONDS_PER_HOUR
SECONDS_PER_WORKWEEK = WORKDAYS_PER_WEEK * SECONDS_PER_WORKDAY

UNIT_SECONDS = {
    "w": SECONDS_PER_WORKWEEK,
    "d": SECONDS_PER_WORKDAY,
    "h": SECONDS_PER_HOUR,
    "m": SECONDS_PER_MINUTE,
}

_SEGMENT_PATTERN = re.compile(r"(\d+(?:\.\d*)?|\.\d+)\s*([wdhm])", re.IGNORECASE)
_DURATION_PATTERN = re.compile(r"\s*(?:(?:\d+(?:\.\d*)?|\.\d+)\s*[wdhm]\s*)+", re.IGNORECASE)


def parse_duration(value: str | None) -> int:
    """Convert a duration string to whole seconds.

    Segments may appear in any order and combination, e.g. ``"1h30m"``,
    ``"2d"``, ``"0.5h"`` or ``"1w 2d"``.

    Args:
        value: Duration string. None, empty and anything that is not
            entirely made of segments give 0.

    Returns:
        Total number of seconds, truncated to an integer.
    """
    if not value or not _DURATION_PATTERN.fullmatch(value):
        return 0

    total = 0.0
    for number, unit in _SEGMENT_PATTERN.findall(value):
        total += float(number) * UNIT_SECONDS[unit.lower()]

    return int(total)
