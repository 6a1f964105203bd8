"""Resolve Clockify tasks to the Jira issues they track."""

import logging
import re

from worklog_sync.clockify import ClockifyClient, ClockifyTask
from worklog_sync.jira.client import JiraClient
from worklog_sync.jira.models import ResolvedIssue

logger = logging.getLogger(__name__)

# Task names start with the issue key, e.g. "ABC-123 Fix login".
ISSUE_KEY_PATTERN = re.compile(r"^\s*([A-Za-z][A-Za-z0-9_]*-\d+)\b")


def extract_issue_key(task_name: str) -> str | None:
    """Get the leading Jira issue key from a task name, if there is one."""
    match = ISSUE_KEY_PATTERN.match(task_name)
    if not match:
        return None
    return match.group(1).upper()


class JiraIssueResolver:
    """Looks up the Jira issue behind a Clockify task ID."""

    def __init__(self, clockify: ClockifyClient, jira: JiraClient, workspace_id: str) -> None:
        self.clockify = clockify
        self.jira = jira
        self.workspace_id = workspace_id
        self._tasks: dict[str, ClockifyTask] | None = None

    async def _task_index(self) -> dict[str, ClockifyTask]:
        if self._tasks is None:
            tasks = await self.clockify.list_all_tasks(self.workspace_id)
            self._tasks = {task.id: task for task in tasks}
            logger.debug(f"Indexed {len(self._tasks)} Clockify tasks")
        return self._tasks

    async def resolve(self, task_id: str | None) -> ResolvedIssue | None:
        """Resolve a Clockify task ID.

        Returns:
            The resolved issue, or None when the task is unknown, its name
            carries no issue key, or Jira has no such issue.

        Raises:
            httpx.HTTPError: If a Clockify or Jira request fails.
        """
        if not task_id:
            return None

        task = (await self._task_index()).get(task_id)
        if task is None:
            logger.warning(f"Unknown Clockify task {task_id}")
            return None

        key = extract_issue_key(task.name)
        if key is None:
            logger.warning(f"Task '{task.name}' has no Jira issue key")
            return None

        issue = await self.jira.get_issue(key)
        if issue is None:
            return None
        return ResolvedIssue.from_issue(issue)
