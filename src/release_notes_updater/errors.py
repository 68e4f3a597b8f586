"""Exception hierarchy for the release notes updater.

Every failure that should abort a run derives from ReleaseNotesError, so
the CLI entry point can catch one type, report the message to the
workflow and exit non-zero. Nothing here is retried.
"""

from __future__ import annotations


class ReleaseNotesError(Exception):
    """Base class for all errors that fail the run."""


class ConfigurationError(ReleaseNotesError):
    """Inputs are missing or malformed (no release identifier, no token, ...)."""


class NetworkError(ReleaseNotesError):
    """The GitHub API could not be reached (DNS, connect, timeout)."""


class GitHubAPIError(ReleaseNotesError):
    """GitHub answered with a non-success status code."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(GitHubAPIError):
    """The requested release does not exist (HTTP 404)."""


class AuthError(GitHubAPIError):
    """The token was rejected or lacks permission (HTTP 401/403)."""
