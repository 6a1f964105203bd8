"""Diffing of local time entries against exported worklogs."""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta, tzinfo

from worklog_sync.clockify.models import ClockifyTimeEntry
from worklog_sync.sync.correlation import has_correlation_tag, is_linked
from worklog_sync.tempo.models import TempoWorklog

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 14


@dataclass(frozen=True)
class SyncWindow:
    """Range of days compared between Clockify and Tempo."""

    start: date
    end: date

    @classmethod
    def around(cls, today: date, days: int = DEFAULT_WINDOW_DAYS) -> "SyncWindow":
        """Window reaching ``days`` back and ``days`` ahead of ``today``."""
        return cls(today - timedelta(days=days), today + timedelta(days=days))

    def __str__(self) -> str:
        return f"{self.start.isoformat()}..{self.end.isoformat()}"


@dataclass
class SyncPlan:
    """What a sync run would do."""

    window: SyncWindow
    to_export: list[ClockifyTimeEntry] = field(default_factory=list)
    already_synced: list[ClockifyTimeEntry] = field(default_factory=list)
    orphaned: list[TempoWorklog] = field(default_factory=list)
    running: list[ClockifyTimeEntry] = field(default_factory=list)

    def __str__(self) -> str:
        return (
            f"To export: {len(self.to_export)}, "
            f"Already synced: {len(self.already_synced)}, "
            f"Orphaned: {len(self.orphaned)}, "
            f"Running: {len(self.running)}"
        )


class ReconciliationEngine:
    """Works out which entries still need exporting."""

    def __init__(self, tz: tzinfo | None = None) -> None:
        """Initialize reconciliation engine.

        Args:
            tz: Timezone whose calendar days are matched. None means system local.
        """
        self.tz = tz

    def plan(
        self,
        entries: list[ClockifyTimeEntry],
        worklogs: list[TempoWorklog],
        window: SyncWindow,
    ) -> SyncPlan:
        """Compare entries with worklogs. Makes no calls and changes nothing.

        Args:
            entries: Clockify entries in the window.
            worklogs: Tempo worklogs in the window.
            window: The compared range of days.

        Returns:
            The sync plan, with ``to_export`` ordered by start time.
        """
        plan = SyncPlan(window=window)

        for entry in entries:
            if entry.is_running:
                plan.running.append(entry)
            elif any(is_linked(worklog, entry, self.tz) for worklog in worklogs):
                plan.already_synced.append(entry)
            else:
                plan.to_export.append(entry)

        plan.to_export.sort(key=lambda e: e.start_time)

        plan.orphaned = [
            worklog
            for worklog in worklogs
            if not has_correlation_tag(worklog.description) and worklog.start_date >= window.start
        ]

        if plan.running:
            logger.info(f"Ignoring {len(plan.running)} running time entries")
        logger.info(f"Plan for {window}: {plan}")
        return plan
