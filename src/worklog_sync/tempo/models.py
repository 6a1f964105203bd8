"""Pydantic models for Tempo API requests and responses."""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TempoWorklog(BaseModel):
    """A worklog already stored in Tempo."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    tempo_worklog_id: int = Field(alias="tempoWorklogId")
    description: str = ""
    start_date: date = Field(alias="startDate")
    time_spent_seconds: int = Field(default=0, alias="timeSpentSeconds")


class TempoWorklogPayload(BaseModel):
    """Body of a worklog create request."""

    model_config = ConfigDict(populate_by_name=True)

    author_account_id: str = Field(alias="authorAccountId")
    description: str
    issue_id: int = Field(alias="issueId")
    start_date: date = Field(alias="startDate")
    start_time: str = Field(alias="startTime")
    time_spent_seconds: int = Field(alias="timeSpentSeconds")
    remaining_estimate_seconds: int | None = Field(default=None, alias="remainingEstimateSeconds")

    def to_api_dict(self) -> dict[str, Any]:
        """Convert to API-compatible dictionary.

        Returns:
            Dictionary for API submission. Key order matches the Tempo docs.
        """
        return {
            "authorAccountId": self.author_account_id,
            "description": self.description,
            "issueId": self.issue_id,
            "startDate": self.start_date.isoformat(),
            "startTime": self.start_time,
            "timeSpentSeconds": self.time_spent_seconds,
            "remainingEstimateSeconds": self.remaining_estimate_seconds,
        }
