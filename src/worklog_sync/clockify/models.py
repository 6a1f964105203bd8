"""Pydantic models for Clockify API responses."""

from datetime import datetime, tzinfo

from pydantic import BaseModel, ConfigDict, Field


def parse_timestamp(value: str) -> datetime:
    """Parse a Clockify ISO 8601 timestamp into an aware UTC datetime."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class ClockifyUser(BaseModel):
    """Clockify user model."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str = ""
    email: str | None = None
    default_workspace: str | None = Field(default=None, alias="defaultWorkspace")


class ClockifyWorkspace(BaseModel):
    """Clockify workspace model."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str


class ClockifyProject(BaseModel):
    """Clockify project model."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    workspace_id: str | None = Field(default=None, alias="workspaceId")
    archived: bool = False


class ClockifyTask(BaseModel):
    """Clockify task model."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    project_id: str | None = Field(default=None, alias="projectId")
    status: str | None = None


class ClockifyTimeInterval(BaseModel):
    """Start and end of a time entry. ``end`` is empty while the timer runs."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    start: str
    end: str | None = None

    @property
    def start_time(self) -> datetime:
        return parse_timestamp(self.start)

    @property
    def end_time(self) -> datetime | None:
        if not self.end:
            return None
        return parse_timestamp(self.end)


class ClockifyTimeEntry(BaseModel):
    """Clockify time entry model."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    description: str | None = None
    task_id: str | None = Field(default=None, alias="taskId")
    project_id: str | None = Field(default=None, alias="projectId")
    type: str = "REGULAR"
    user_id: str | None = Field(default=None, alias="userId")
    workspace_id: str | None = Field(default=None, alias="workspaceId")
    time_interval: ClockifyTimeInterval = Field(alias="timeInterval")

    @property
    def is_running(self) -> bool:
        """Whether the timer for this entry is still active."""
        return not self.time_interval.end

    @property
    def start_time(self) -> datetime:
        """Get start time of entry (UTC)."""
        return self.time_interval.start_time

    @property
    def end_time(self) -> datetime | None:
        """Get end time of entry (UTC), None while running."""
        return self.time_interval.end_time

    @property
    def duration_seconds(self) -> int:
        """Length of the entry in whole seconds.

        Raises:
            RuntimeError: If the entry is still running.
        """
        end = self.end_time
        if end is None:
            raise RuntimeError(f"Time entry {self.id} is still running and has no duration")
        return int((end - self.start_time).total_seconds())

    def local_start(self, tz: tzinfo | None = None) -> datetime:
        """Get start time converted to ``tz`` (system local time when None)."""
        return self.start_time.astimezone(tz)
