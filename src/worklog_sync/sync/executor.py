"""Execution of a sync plan against Tempo."""

import logging
from dataclasses import dataclass
from datetime import tzinfo
from enum import Enum

from worklog_sync.clockify.models import ClockifyTimeEntry
from worklog_sync.jira.models import ResolvedIssue
from worklog_sync.sync.correlation import tag_description
from worklog_sync.sync.interfaces import AuthorProvider, IssueResolver, WorklogStore
from worklog_sync.sync.reconcile import SyncPlan
from worklog_sync.sync.remaining import RemainingEstimateResolver
from worklog_sync.tempo.models import TempoWorklogPayload

logger = logging.getLogger(__name__)


class OutcomeStatus(str, Enum):
    """What happened to a single item."""

    EXPORTED = "exported"
    PLANNED = "planned"
    SKIPPED = "skipped"
    FAILED = "failed"
    DELETED = "deleted"


@dataclass
class ItemOutcome:
    """Result for one time entry or orphaned worklog."""

    item_id: str
    date: str
    status: OutcomeStatus
    detail: str | None = None
    worklog_id: int | None = None


@dataclass
class ExportPlanItem:
    """A time entry ready to be sent, with its export text and estimate."""

    entry: ClockifyTimeEntry
    issue: ResolvedIssue
    description: str
    remaining_seconds: int | None


class SyncResult:
    """Results from a sync operation."""

    def __init__(self) -> None:
        """Initialize sync result."""
        self.succeeded = 0
        self.skipped = 0
        self.failed = 0
        self.deleted = 0
        self.outcomes: list[ItemOutcome] = []

    def add_success(self, outcome: ItemOutcome) -> None:
        """Record an exported (or, in a dry run, planned) entry."""
        self.succeeded += 1
        self.outcomes.append(outcome)

    def add_skip(self, outcome: ItemOutcome) -> None:
        """Record a skipped entry."""
        self.skipped += 1
        self.outcomes.append(outcome)

    def add_failure(self, outcome: ItemOutcome) -> None:
        """Record a failed export."""
        self.failed += 1
        self.outcomes.append(outcome)

    def add_deleted(self, outcome: ItemOutcome) -> None:
        """Record a deleted orphaned worklog."""
        self.deleted += 1
        self.outcomes.append(outcome)

    def add_planned_deletion(self, outcome: ItemOutcome) -> None:
        """Record an orphaned worklog a dry run would delete. Not counted as deleted."""
        self.outcomes.append(outcome)

    @property
    def errors(self) -> list[str]:
        """Messages of all failed items."""
        return [f"{o.item_id}: {o.detail}" for o in self.outcomes if o.status == OutcomeStatus.FAILED]

    @property
    def unmapped(self) -> list[str]:
        """IDs of entries skipped because no issue was found."""
        return [o.item_id for o in self.outcomes if o.status == OutcomeStatus.SKIPPED]

    def __str__(self) -> str:
        """String representation of results."""
        return (
            f"Succeeded: {self.succeeded}, "
            f"Skipped: {self.skipped}, "
            f"Failed: {self.failed}, "
            f"Deleted: {self.deleted}"
        )


class ExportExecutor:
    """Sends planned entries to the worklog store one at a time."""

    def __init__(
        self,
        store: WorklogStore,
        resolver: IssueResolver,
        author: AuthorProvider,
        tz: tzinfo | None = None,
        remaining: RemainingEstimateResolver | None = None,
    ) -> None:
        """Initialize export executor.

        Args:
            store: Remote worklog store.
            resolver: Maps Clockify tasks to Jira issues.
            author: Supplies the author account ID.
            tz: Timezone of the exported start date and time. None means system local.
            remaining: Remaining estimate resolver.
        """
        self.store = store
        self.resolver = resolver
        self.author = author
        self.tz = tz
        self.remaining = remaining or RemainingEstimateResolver()

    def build_item(self, entry: ClockifyTimeEntry, issue: ResolvedIssue) -> ExportPlanItem:
        """Work out the export description and remaining estimate for an entry."""
        text, remaining_seconds = self.remaining.resolve(entry.description, issue)
        if not text.strip():
            text = f"Working on {issue.key}"
        return ExportPlanItem(
            entry=entry,
            issue=issue,
            description=tag_description(text, entry.id),
            remaining_seconds=remaining_seconds,
        )

    def build_payload(self, item: ExportPlanItem, author_account_id: str) -> TempoWorklogPayload:
        """Build the create request for a plan item."""
        start = item.entry.local_start(self.tz)
        return TempoWorklogPayload(
            author_account_id=author_account_id,
            description=item.description,
            issue_id=item.issue.issue_id,
            start_date=start.date(),
            start_time=start.strftime("%H:%M:%S"),
            time_spent_seconds=item.entry.duration_seconds,
            remaining_estimate_seconds=item.remaining_seconds,
        )

    async def execute(
        self,
        plan: SyncPlan,
        cleanup_orphaned: bool = False,
        dry_run: bool = False,
    ) -> SyncResult:
        """Export every planned entry, then optionally delete orphaned worklogs.

        A failed export is recorded and the batch carries on. A failed delete
        is raised straight away.

        Args:
            plan: Plan from the reconciliation step.
            cleanup_orphaned: Delete worklogs that carry no correlation tag.
            dry_run: Build everything but send nothing.

        Returns:
            Per-item results and totals.

        Raises:
            httpx.HTTPError: If deleting an orphaned worklog fails.
        """
        result = SyncResult()
        author_account_id: str | None = None

        for entry in plan.to_export:
            day = entry.local_start(self.tz).date().isoformat()
            try:
                issue = await self.resolver.resolve(entry.task_id)
                if issue is None:
                    logger.warning(f"No Jira issue for entry {entry.id} (task {entry.task_id}), skipping")
                    result.add_skip(ItemOutcome(entry.id, day, OutcomeStatus.SKIPPED, "unmapped"))
                    continue

                item = self.build_item(entry, issue)
                if author_account_id is None:
                    author_account_id = await self.author.get_account_id()
                payload = self.build_payload(item, author_account_id)

                if dry_run:
                    logger.info(
                        f"[DRY RUN] Would export {entry.id} -> {issue.key}: "
                        f"{payload.time_spent_seconds}s on {day}"
                    )
                    result.add_success(ItemOutcome(entry.id, day, OutcomeStatus.PLANNED, issue.key))
                    continue

                worklog_id = await self.store.create_worklog(payload)
                logger.info(f"Exported {entry.id} -> {issue.key} as worklog {worklog_id}")
                result.add_success(
                    ItemOutcome(entry.id, day, OutcomeStatus.EXPORTED, issue.key, worklog_id)
                )
            except Exception as e:
                logger.error(f"Failed to export entry {entry.id}: {e}")
                result.add_failure(ItemOutcome(entry.id, day, OutcomeStatus.FAILED, str(e)))

        if cleanup_orphaned:
            await self._delete_orphaned(plan, result, dry_run)

        logger.info(f"Export complete: {result}")
        return result

    async def _delete_orphaned(self, plan: SyncPlan, result: SyncResult, dry_run: bool) -> None:
        for worklog in plan.orphaned:
            day = worklog.start_date.isoformat()
            if dry_run:
                logger.info(f"[DRY RUN] Would delete orphaned worklog {worklog.tempo_worklog_id}")
                result.add_planned_deletion(
                    ItemOutcome(
                        str(worklog.tempo_worklog_id),
                        day,
                        OutcomeStatus.PLANNED,
                        f"would delete: {worklog.description}",
                        worklog.tempo_worklog_id,
                    )
                )
                continue
            await self.store.delete_worklog(worklog.tempo_worklog_id)
            logger.info(f"Deleted orphaned worklog {worklog.tempo_worklog_id}")
            result.add_deleted(
                ItemOutcome(
                    str(worklog.tempo_worklog_id),
                    day,
                    OutcomeStatus.DELETED,
                    worklog.description,
                    worklog.tempo_worklog_id,
                )
            )
