"""Tests for executing sync plans."""

from datetime import date

import httpx
import pytest
from conftest import UTC, FakeAuthor, FakeIssueResolver, FakeWorklogStore, make_entry, make_worklog

from worklog_sync.jira import ResolvedIssue
from worklog_sync.sync import ExportExecutor, OutcomeStatus, SyncPlan, SyncResult, SyncWindow
from worklog_sync.sync.executor import ItemOutcome

WINDOW = SyncWindow(date(2024, 1, 1), date(2024, 1, 31))


class TestSyncResult:
    """Test SyncResult functionality."""

    def test_initialization(self) -> None:
        result = SyncResult()

        assert result.succeeded == 0
        assert result.skipped == 0
        assert result.failed == 0
        assert result.deleted == 0
        assert result.outcomes == []

    def test_counts_and_details(self) -> None:
        result = SyncResult()
        result.add_success(ItemOutcome("e1", "2024-01-15", OutcomeStatus.EXPORTED))
        result.add_skip(ItemOutcome("e2", "2024-01-15", OutcomeStatus.SKIPPED, "unmapped"))
        result.add_failure(ItemOutcome("e3", "2024-01-15", OutcomeStatus.FAILED, "boom"))

        assert result.unmapped == ["e2"]
        assert result.errors == ["e3: boom"]
        assert str(result) == "Succeeded: 1, Skipped: 1, Failed: 1, Deleted: 0"


@pytest.mark.asyncio
class TestExportExecutor:
    """Test ExportExecutor.execute."""

    async def test_payload_fields(
        self, store: FakeWorklogStore, resolver: FakeIssueResolver, author: FakeAuthor
    ) -> None:
        """Test the worklog sent for a plain entry."""
        entry = make_entry("e1", "2024-01-15T09:00:00Z", "2024-01-15T11:30:00Z", "Work")
        plan = SyncPlan(window=WINDOW, to_export=[entry])

        result = await ExportExecutor(store, resolver, author, UTC).execute(plan)

        assert result.succeeded == 1
        assert store.created[0].to_api_dict() == {
            "authorAccountId": "account_123",
            "description": "Work [cid:e1]",
            "issueId": 10002,
            "startDate": "2024-01-15",
            "startTime": "09:00:00",
            "timeSpentSeconds": 9000,
            "remainingEstimateSeconds": 14400,
        }
        assert result.outcomes[0].worklog_id == 1001

    async def test_remaining_directive(
        self, store: FakeWorklogStore, resolver: FakeIssueResolver, author: FakeAuthor
    ) -> None:
        """Test [rem:2h] sets the estimate and is removed from the description."""
        entry = make_entry("e1", "2024-01-15T09:00:00Z", "2024-01-15T10:00:00Z", "Work [rem:2h]")
        plan = SyncPlan(window=WINDOW, to_export=[entry])

        await ExportExecutor(store, resolver, author, UTC).execute(plan)

        payload = store.created[0]
        assert payload.remaining_estimate_seconds == 7200
        assert "[rem:" not in payload.description
        assert payload.description == "Work [cid:e1]"
        assert payload.time_spent_seconds == 3600

    async def test_empty_description_uses_issue_key(
        self, store: FakeWorklogStore, resolver: FakeIssueResolver, author: FakeAuthor
    ) -> None:
        entry = make_entry("e1", "2024-01-15T09:00:00Z", "2024-01-15T10:00:00Z", None)
        plan = SyncPlan(window=WINDOW, to_export=[entry])

        await ExportExecutor(store, resolver, author, UTC).execute(plan)

        assert store.created[0].description == "Working on ABC-1 [cid:e1]"

    async def test_unmapped_entry_is_skipped(
        self, store: FakeWorklogStore, resolver: FakeIssueResolver, author: FakeAuthor
    ) -> None:
        unmapped = make_entry("e1", "2024-01-15T09:00:00Z", "2024-01-15T10:00:00Z", task_id="nope")
        mapped = make_entry("e2", "2024-01-15T10:00:00Z", "2024-01-15T11:00:00Z")
        plan = SyncPlan(window=WINDOW, to_export=[unmapped, mapped])

        result = await ExportExecutor(store, resolver, author, UTC).execute(plan)

        assert result.skipped == 1
        assert result.succeeded == 1
        assert result.unmapped == ["e1"]
        assert result.outcomes[0].detail == "unmapped"
        assert len(store.created) == 1

    async def test_partial_failure_continues(
        self, store: FakeWorklogStore, resolver: FakeIssueResolver, author: FakeAuthor
    ) -> None:
        """Test a failed create in the middle does not stop the batch."""
        entries = [
            make_entry(f"e{i}", f"2024-01-15T0{i}:00:00Z", f"2024-01-15T0{i}:30:00Z")
            for i in range(1, 4)
        ]
        plan = SyncPlan(window=WINDOW, to_export=entries)
        store.fail_on_create = {2}

        result = await ExportExecutor(store, resolver, author, UTC).execute(plan)

        assert store.create_calls == 3
        assert result.succeeded == 2
        assert result.failed == 1
        assert [o.status for o in result.outcomes] == [
            OutcomeStatus.EXPORTED,
            OutcomeStatus.FAILED,
            OutcomeStatus.EXPORTED,
        ]
        assert "500" in result.outcomes[1].detail

    async def test_resolver_error_is_recorded(
        self, store: FakeWorklogStore, author: FakeAuthor
    ) -> None:
        class BrokenResolver:
            async def resolve(self, task_id: str | None) -> ResolvedIssue | None:
                raise httpx.ConnectError("Jira unreachable")

        entry = make_entry("e1", "2024-01-15T09:00:00Z", "2024-01-15T10:00:00Z")
        plan = SyncPlan(window=WINDOW, to_export=[entry])

        result = await ExportExecutor(store, BrokenResolver(), author, UTC).execute(plan)

        assert result.failed == 1
        assert "Jira unreachable" in result.errors[0]

    async def test_orphans_kept_when_cleanup_disabled(
        self, resolver: FakeIssueResolver, author: FakeAuthor
    ) -> None:
        orphan = make_worklog(7, "Manual entry", date(2024, 1, 15))
        store = FakeWorklogStore([orphan])
        plan = SyncPlan(window=WINDOW, orphaned=[orphan])

        result = await ExportExecutor(store, resolver, author, UTC).execute(plan)

        assert store.deleted == []
        assert result.deleted == 0

    async def test_orphans_deleted_when_enabled(
        self, resolver: FakeIssueResolver, author: FakeAuthor
    ) -> None:
        orphans = [make_worklog(7, "Manual", date(2024, 1, 15)), make_worklog(8, "Other", date(2024, 1, 16))]
        store = FakeWorklogStore(orphans)
        plan = SyncPlan(window=WINDOW, orphaned=orphans)

        result = await ExportExecutor(store, resolver, author, UTC).execute(plan, cleanup_orphaned=True)

        assert store.deleted == [7, 8]
        assert result.deleted == 2

    async def test_delete_failure_propagates(
        self, resolver: FakeIssueResolver, author: FakeAuthor
    ) -> None:
        """Test a failed delete aborts the remaining cleanup."""
        orphans = [
            make_worklog(7, "Manual", date(2024, 1, 15)),
            make_worklog(8, "Other", date(2024, 1, 16)),
            make_worklog(9, "Third", date(2024, 1, 17)),
        ]
        store = FakeWorklogStore(orphans)
        store.fail_on_delete = {8}
        plan = SyncPlan(window=WINDOW, orphaned=orphans)

        with pytest.raises(httpx.HTTPStatusError):
            await ExportExecutor(store, resolver, author, UTC).execute(plan, cleanup_orphaned=True)

        assert store.deleted == [7]

    async def test_dry_run_sends_nothing(
        self, resolver: FakeIssueResolver, author: FakeAuthor
    ) -> None:
        orphan = make_worklog(7, "Manual", date(2024, 1, 15))
        store = FakeWorklogStore([orphan])
        entry = make_entry("e1", "2024-01-15T09:00:00Z", "2024-01-15T10:00:00Z")
        plan = SyncPlan(window=WINDOW, to_export=[entry], orphaned=[orphan])

        result = await ExportExecutor(store, resolver, author, UTC).execute(
            plan, cleanup_orphaned=True, dry_run=True
        )

        assert store.create_calls == 0
        assert store.deleted == []
        assert result.succeeded == 1
        assert result.outcomes[0].status == OutcomeStatus.PLANNED

    async def test_dry_run_lists_orphans_it_would_delete(
        self, resolver: FakeIssueResolver, author: FakeAuthor
    ) -> None:
        orphans = [make_worklog(7, "Manual", date(2024, 1, 15)), make_worklog(8, "Other", date(2024, 1, 16))]
        store = FakeWorklogStore(orphans)
        plan = SyncPlan(window=WINDOW, orphaned=orphans)

        result = await ExportExecutor(store, resolver, author, UTC).execute(
            plan, cleanup_orphaned=True, dry_run=True
        )

        assert store.deleted == []
        assert result.deleted == 0
        assert [(o.item_id, o.status, o.worklog_id) for o in result.outcomes] == [
            ("7", OutcomeStatus.PLANNED, 7),
            ("8", OutcomeStatus.PLANNED, 8),
        ]
        assert result.outcomes[0].detail == "would delete: Manual"

    async def test_dry_run_without_cleanup_lists_no_orphans(
        self, resolver: FakeIssueResolver, author: FakeAuthor
    ) -> None:
        orphan = make_worklog(7, "Manual", date(2024, 1, 15))
        plan = SyncPlan(window=WINDOW, orphaned=[orphan])

        result = await ExportExecutor(FakeWorklogStore([orphan]), resolver, author, UTC).execute(
            plan, dry_run=True
        )

        assert result.outcomes == []
