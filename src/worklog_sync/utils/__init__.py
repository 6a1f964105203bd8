"""Utility modules for worklog-sync."""

from worklog_sync.utils.duration import parse_duration
from worklog_sync.utils.logging import get_logger, setup_logging
from worklog_sync.utils.rate_limiter import RateLimiter
from worklog_sync.utils.storage import StorageManager

__all__ = ["get_logger", "parse_duration", "setup_logging", "RateLimiter", "StorageManager"]
