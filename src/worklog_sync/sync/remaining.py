"""Resolution of the remaining estimate sent along with each worklog."""

import logging
import re

from worklog_sync.jira.models import ResolvedIssue
from worklog_sync.utils.duration import parse_duration

logger = logging.getLogger(__name__)

DIRECTIVE_PATTERN = re.compile(r"\[rem:([^\]]*)\]", re.IGNORECASE)
AUTO = "auto"


class RemainingEstimateResolver:
    """Derives the remaining estimate from a ``[rem:...]`` directive or the issue.

    A description may carry one directive, e.g. ``"Refactor [rem:2h]"``.
    ``[rem:<duration>]`` sets the remaining estimate explicitly and
    ``[rem:auto]`` currently falls back to the issue's own remaining
    estimate, the same as having no directive. The directive never reaches
    the exported description.
    """

    def resolve(self, description: str | None, issue: ResolvedIssue) -> tuple[str, int]:
        """Split a description into export text and remaining seconds.

        Args:
            description: Time entry description, possibly with a directive.
            issue: The issue the time is logged against.

        Returns:
            Tuple of (description without the directive, remaining seconds).
        """
        text = description or ""
        match = DIRECTIVE_PATTERN.search(text)
        fallback = parse_duration(issue.remaining_estimate)

        if match is None:
            return text, fallback

        stripped = text[: match.start()] + text[match.end():]
        value = match.group(1).strip()

        # TODO: confirm with the Jira admins whether "auto" should subtract the
        # logged duration from the issue estimate instead of reusing it.
        if value.lower() == AUTO:
            logger.debug(f"[rem:auto] on {issue.key}, using issue estimate")
            return stripped, fallback

        return stripped, parse_duration(value)
