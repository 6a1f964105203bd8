"""Synchronization engine for worklogs."""

from worklog_sync.sync.engine import SyncEngine
from worklog_sync.sync.executor import (
    ExportExecutor,
    ExportPlanItem,
    ItemOutcome,
    OutcomeStatus,
    SyncResult,
)
from worklog_sync.sync.reconcile import ReconciliationEngine, SyncPlan, SyncWindow
from worklog_sync.sync.remaining import RemainingEstimateResolver

__all__ = [
    "ExportExecutor",
    "ExportPlanItem",
    "ItemOutcome",
    "OutcomeStatus",
    "ReconciliationEngine",
    "RemainingEstimateResolver",
    "SyncEngine",
    "SyncPlan",
    "SyncResult",
    "SyncWindow",
]
