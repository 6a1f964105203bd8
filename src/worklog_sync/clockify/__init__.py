"""Clockify API integration."""

from worklog_sync.clockify.client import ClockifyClient
from worklog_sync.clockify.models import (
    ClockifyProject,
    ClockifyTask,
    ClockifyTimeEntry,
    ClockifyTimeInterval,
    ClockifyUser,
    ClockifyWorkspace,
)

__all__ = [
    "ClockifyClient",
    "ClockifyProject",
    "ClockifyTask",
    "ClockifyTimeEntry",
    "ClockifyTimeInterval",
    "ClockifyUser",
    "ClockifyWorkspace",
]
