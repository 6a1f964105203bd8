"""Correlation tags linking exported worklogs back to their time entries.

Every exported worklog carries ``[cid:<entry id>]`` in its description. The
tag is the only record of what has been exported, so a re-run finds the same
links and exports nothing twice.
"""

from datetime import tzinfo

from worklog_sync.clockify.models import ClockifyTimeEntry
from worklog_sync.tempo.models import TempoWorklog

TAG_PREFIX = "[cid:"


def correlation_tag(entry_id: str) -> str:
    """Build the tag for an entry ID."""
    return f"{TAG_PREFIX}{entry_id}]"


def tag_description(description: str, entry_id: str) -> str:
    """Append the correlation tag to a description."""
    return f"{description.strip()} {correlation_tag(entry_id)}"


def has_correlation_tag(description: str | None) -> bool:
    """Whether a description carries any correlation tag at all."""
    return TAG_PREFIX in (description or "")


def is_linked(worklog: TempoWorklog, entry: ClockifyTimeEntry, tz: tzinfo | None = None) -> bool:
    """Whether a worklog was exported from the given entry.

    The tag must match and the worklog must sit on the entry's local start
    day; the time of day is not compared.
    """
    return (
        correlation_tag(entry.id) in worklog.description
        and worklog.start_date == entry.local_start(tz).date()
    )
