"""Sync engine exporting Clockify time entries to Tempo worklogs."""

import logging
from datetime import tzinfo

from worklog_sync.sync.executor import ExportExecutor, SyncResult
from worklog_sync.sync.interfaces import AuthorProvider, EntrySource, IssueResolver, WorklogStore
from worklog_sync.sync.reconcile import ReconciliationEngine, SyncPlan, SyncWindow

logger = logging.getLogger(__name__)


class SyncEngine:
    """Main synchronization engine."""

    def __init__(
        self,
        entry_source: EntrySource,
        worklog_store: WorklogStore,
        issue_resolver: IssueResolver,
        author: AuthorProvider,
        workspace_id: str,
        user_id: str,
        tz: tzinfo | None = None,
    ) -> None:
        """Initialize sync engine.

        Args:
            entry_source: Source of Clockify time entries.
            worklog_store: Tempo worklog store.
            issue_resolver: Maps Clockify tasks to Jira issues.
            author: Supplies the Jira account ID worklogs are written as.
            workspace_id: Clockify workspace ID.
            user_id: Clockify user ID.
            tz: Timezone whose calendar days are used. None means system local.
        """
        self.entry_source = entry_source
        self.worklog_store = worklog_store
        self.workspace_id = workspace_id
        self.user_id = user_id
        self.reconciler = ReconciliationEngine(tz)
        self.executor = ExportExecutor(worklog_store, issue_resolver, author, tz)

    async def plan(self, window: SyncWindow) -> SyncPlan:
        """Fetch both sides of the window and work out what to export.

        Only reads; nothing is written.

        Raises:
            httpx.HTTPError: If fetching entries or worklogs fails.
        """
        logger.info(f"Planning sync for {window}")

        entries = await self.entry_source.get_time_entries(
            self.workspace_id, self.user_id, window.start, window.end
        )
        logger.info(f"Found {len(entries)} Clockify time entries")

        worklogs = await self.worklog_store.list_worklogs(window.start, window.end)
        logger.info(f"Found {len(worklogs)} Tempo worklogs")

        return self.reconciler.plan(entries, worklogs, window)

    async def execute(
        self,
        plan: SyncPlan,
        cleanup_orphaned: bool = False,
        dry_run: bool = False,
    ) -> SyncResult:
        """Carry out a plan. See ``ExportExecutor.execute``."""
        return await self.executor.execute(plan, cleanup_orphaned=cleanup_orphaned, dry_run=dry_run)

    async def sync(
        self,
        window: SyncWindow,
        cleanup_orphaned: bool = False,
        dry_run: bool = False,
    ) -> SyncResult:
        """Plan and execute in one go."""
        plan = await self.plan(window)
        return await self.execute(plan, cleanup_orphaned=cleanup_orphaned, dry_run=dry_run)
