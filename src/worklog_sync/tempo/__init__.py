"""Tempo API integration."""

from worklog_sync.tempo.client import TempoClient
from worklog_sync.tempo.models import TempoWorklog, TempoWorklogPayload

__all__ = ["TempoClient", "TempoWorklog", "TempoWorklogPayload"]
