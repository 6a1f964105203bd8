"""Pydantic models for Jira API responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class JiraTimeTracking(BaseModel):
    """Time tracking block of a Jira issue."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    original_estimate: str | None = Field(default=None, alias="originalEstimate")
    remaining_estimate: str | None = Field(default=None, alias="remainingEstimate")
    time_spent: str | None = Field(default=None, alias="timeSpent")


class JiraIssueFields(BaseModel):
    """Subset of issue fields the sync reads. Everything else is opaque."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    summary: str | None = None
    timetracking: JiraTimeTracking = Field(default_factory=JiraTimeTracking)
    status: dict[str, Any] | None = None


class JiraIssue(BaseModel):
    """Jira issue model."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int
    key: str
    fields: JiraIssueFields = Field(default_factory=JiraIssueFields)


class ResolvedIssue(BaseModel):
    """The parts of a Jira issue needed to export a worklog against it."""

    issue_id: int
    key: str
    remaining_estimate: str | None = None

    @classmethod
    def from_issue(cls, issue: JiraIssue) -> "ResolvedIssue":
        return cls(
            issue_id=issue.id,
            key=issue.key,
            remaining_estimate=issue.fields.timetracking.remaining_estimate,
        )
