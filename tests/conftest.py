"""Pytest configuration and fixtures."""

import tempfile
from datetime import date, timezone
from pathlib import Path

import httpx
import pytest

from worklog_sync.clockify import ClockifyTimeEntry
from worklog_sync.config import Config
from worklog_sync.jira import ResolvedIssue
from worklog_sync.tempo import TempoWorklog, TempoWorklogPayload
from worklog_sync.utils import StorageManager

UTC = timezone.utc


def make_entry(
    entry_id: str,
    start: str,
    end: str | None,
    description: str | None = "Work",
    task_id: str | None = "task_1",
) -> ClockifyTimeEntry:
    """Helper to create a ClockifyTimeEntry."""
    return ClockifyTimeEntry(
        id=entry_id,
        description=description,
        taskId=task_id,
        projectId="project_1",
        timeInterval={"start": start, "end": end},
        userId="user_1",
        workspaceId="ws_1",
    )


def make_worklog(worklog_id: int, description: str, start_date: date, seconds: int = 3600) -> TempoWorklog:
    """Helper to create a TempoWorklog."""
    return TempoWorklog(
        tempoWorklogId=worklog_id,
        description=description,
        startDate=start_date,
        timeSpentSeconds=seconds,
    )


class FakeWorklogStore:
    """In-memory Tempo stand-in that tags created worklogs like the real API."""

    def __init__(self, worklogs: list[TempoWorklog] | None = None) -> None:
        self.worklogs = list(worklogs or [])
        self.created: list[TempoWorklogPayload] = []
        self.deleted: list[int] = []
        self.create_calls = 0
        self.fail_on_create: set[int] = set()
        self.fail_on_delete: set[int] = set()
        self._next_id = 1000

    async def list_worklogs(self, start_date: date, end_date: date) -> list[TempoWorklog]:
        return [w for w in self.worklogs if start_date <= w.start_date <= end_date]

    async def create_worklog(self, payload: TempoWorklogPayload) -> int:
        self.create_calls += 1
        if self.create_calls in self.fail_on_create:
            raise httpx.HTTPStatusError(
                "500 Internal Server Error",
                request=httpx.Request("POST", "https://api.tempo.io/4/worklogs"),
                response=httpx.Response(500),
            )
        self._next_id += 1
        self.created.append(payload)
        self.worklogs.append(
            make_worklog(
                self._next_id,
                payload.description,
                payload.start_date,
                payload.time_spent_seconds,
            )
        )
        return self._next_id

    async def delete_worklog(self, worklog_id: int) -> None:
        if worklog_id in self.fail_on_delete:
            raise httpx.HTTPStatusError(
                "403 Forbidden",
                request=httpx.Request("DELETE", f"https://api.tempo.io/4/worklogs/{worklog_id}"),
                response=httpx.Response(403),
            )
        self.deleted.append(worklog_id)
        self.worklogs = [w for w in self.worklogs if w.tempo_worklog_id != worklog_id]


class FakeIssueResolver:
    """Resolves task IDs from a fixed table."""

    def __init__(self, issues: dict[str, ResolvedIssue]) -> None:
        self.issues = issues
        self.calls: list[str | None] = []

    async def resolve(self, task_id: str | None) -> ResolvedIssue | None:
        self.calls.append(task_id)
        return self.issues.get(task_id or "")


class FakeAuthor:
    """Fixed Jira account."""

    async def get_account_id(self) -> str:
        return "account_123"


class FakeEntrySource:
    """Returns a fixed list of Clockify entries."""

    def __init__(self, entries: list[ClockifyTimeEntry]) -> None:
        self.entries = entries

    async def get_time_entries(
        self, workspace_id: str, user_id: str, start_date: date, end_date: date
    ) -> list[ClockifyTimeEntry]:
        return list(self.entries)


@pytest.fixture
def temp_config_dir() -> Path:
    """Create a temporary configuration directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def storage_manager(temp_config_dir: Path) -> StorageManager:
    """Create a storage manager with temporary directory."""
    return StorageManager(temp_config_dir)


@pytest.fixture
def config(temp_config_dir: Path) -> Config:
    """Create a config instance with temporary directory."""
    return Config(temp_config_dir)


@pytest.fixture
def sample_issue() -> ResolvedIssue:
    """Create a sample resolved Jira issue."""
    return ResolvedIssue(issue_id=10002, key="ABC-1", remaining_estimate="4h")


@pytest.fixture
def resolver(sample_issue: ResolvedIssue) -> FakeIssueResolver:
    """Resolver knowing only task_1."""
    return FakeIssueResolver({"task_1": sample_issue})


@pytest.fixture
def store() -> FakeWorklogStore:
    """Empty worklog store."""
    return FakeWorklogStore()


@pytest.fixture
def author() -> FakeAuthor:
    """Fixed author."""
    return FakeAuthor()
