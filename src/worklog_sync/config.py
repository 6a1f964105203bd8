"""Configuration management for worklog-sync."""

from datetime import timedelta, tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

from worklog_sync.sync.reconcile import DEFAULT_WINDOW_DAYS
from worklog_sync.utils.rate_limiter import RateLimiter
from worklog_sync.utils.storage import StorageManager

DEFAULT_MAX_REQUESTS = 10
DEFAULT_WINDOW_SECONDS = 1.0


class Config:
    """Manages application settings stored in settings.yaml."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize configuration.

        Args:
            config_dir: Directory for storing configuration.
        """
        self.storage = StorageManager(config_dir)
        self._settings = self.storage.load_settings()

    def get_settings(self) -> dict[str, Any]:
        """Get all current settings.

        Returns:
            Settings dictionary.
        """
        return self._settings

    def get(self, key: str, default: Any = None) -> Any:
        """Get a single setting.

        Args:
            key: Setting name.
            default: Value returned when the setting is absent or empty.
        """
        value = self._settings.get(key)
        return default if value in (None, "") else value

    def update(self, **settings: Any) -> None:
        """Update settings and save them.

        Args:
            **settings: Setting names and values.
        """
        self._settings.update(settings)
        self.storage.save_settings(self._settings)

    @property
    def jira_base_url(self) -> str | None:
        """Jira site URL, e.g. https://mycompany.atlassian.net"""
        return self.get("jira_base_url")

    @property
    def jira_user(self) -> str | None:
        """Email address used to authenticate against Jira."""
        return self.get("jira_user")

    @property
    def workspace_id(self) -> str | None:
        """Clockify workspace to read. None means the user's default workspace."""
        return self.get("workspace_id")

    @property
    def days(self) -> int:
        """Days to look back and ahead of today."""
        return int(self.get("days", DEFAULT_WINDOW_DAYS))

    @property
    def timezone(self) -> tzinfo | None:
        """Timezone used for worklog dates. None means system local time.

        Raises:
            zoneinfo.ZoneInfoNotFoundError: If the configured name is unknown.
        """
        name = self.get("timezone")
        return ZoneInfo(name) if name else None

    def create_rate_limiter(self) -> RateLimiter:
        """Create a rate limiter from the ``rate_limit`` settings."""
        limits = self.get("rate_limit", {})
        return RateLimiter(
            int(limits.get("max_requests", DEFAULT_MAX_REQUESTS)),
            timedelta(seconds=float(limits.get("window_seconds", DEFAULT_WINDOW_SECONDS))),
        )

    def is_configured(self) -> bool:
        """Check whether Jira settings and all API tokens are present.

        Returns:
            True if a sync can run, False otherwise.
        """
        tokens = self.storage.load_tokens()
        return bool(
            self.jira_base_url
            and self.jira_user
            and all(tokens.get(service) for service in ("clockify", "jira", "tempo"))
        )
