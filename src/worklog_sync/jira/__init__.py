"""Jira API integration."""

from worklog_sync.jira.client import JiraClient
from worklog_sync.jira.models import JiraIssue, JiraIssueFields, JiraTimeTracking, ResolvedIssue
from worklog_sync.jira.resolver import JiraIssueResolver, extract_issue_key

__all__ = [
    "JiraClient",
    "JiraIssue",
    "JiraIssueFields",
    "JiraIssueResolver",
    "JiraTimeTracking",
    "ResolvedIssue",
    "extract_issue_key",
]
