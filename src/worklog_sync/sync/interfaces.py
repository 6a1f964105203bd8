"""Contracts for the services the sync engine talks to."""

from datetime import date
from typing import Protocol

from worklog_sync.clockify.models import ClockifyTimeEntry
from worklog_sync.jira.models import ResolvedIssue
from worklog_sync.tempo.models import TempoWorklog, TempoWorklogPayload


class EntrySource(Protocol):
    """Where local time entries come from (Clockify)."""

    async def get_time_entries(
        self, workspace_id: str, user_id: str, start_date: date, end_date: date
    ) -> list[ClockifyTimeEntry]: ...


class IssueResolver(Protocol):
    """Maps a local task reference to the issue its time is logged against."""

    async def resolve(self, task_id: str | None) -> ResolvedIssue | None: ...


class AuthorProvider(Protocol):
    """Supplies the account ID worklogs are authored as."""

    async def get_account_id(self) -> str: ...


class WorklogStore(Protocol):
    """Remote worklog store (Tempo)."""

    async def list_worklogs(self, start_date: date, end_date: date) -> list[TempoWorklog]: ...

    async def create_worklog(self, payload: TempoWorklogPayload) -> int: ...

    async def delete_worklog(self, worklog_id: int) -> None: ...
