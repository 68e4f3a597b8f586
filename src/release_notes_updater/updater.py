"""Core orchestrator for updating a release's notes.

The updater follows this flow:
1. Receive the step configuration (UpdaterInput)
2. Bail out with a warning if there is nothing to prepend or append
3. Resolve the release by ID, or by tag when no ID is given
4. Skip the update if the current body already matches skip_if_contains
5. Compose the new body and write it back with one API call
6. Return the final body, which the CLI publishes as `updated-body`

Nothing is retried: any error propagates and fails the step.
"""

from __future__ import annotations

import argparse
import asyncio
import re
import sys

from release_notes_updater import actions
from release_notes_updater.errors import ConfigurationError, ReleaseNotesError
from release_notes_updater.github import GitHubReleaseClient, ReleaseClientProtocol
from release_notes_updater.logging_config import get_logger, setup_logging
from release_notes_updater.schemas import Release, RepoRef, UpdaterInput

logger = get_logger(__name__)

SEPARATOR = "\n\n"
# ASCII digits only: int() would also take "1_000", "+5" and non-ASCII digits
RELEASE_ID_RE = re.compile(r"-?\d+", re.ASCII)


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def should_skip(content: str, pattern: str) -> bool:
    """Check if content matches the skip pattern.

    The pattern is tried as a regular expression first; if it does not
    compile it is looked up as a plain substring. A valid regex is always
    used as one, so "." matches any non-empty body.
    """
    if not content or not pattern:
        return False

    try:
        regex = re.compile(pattern)
    except re.error:
        return pattern in content
    return regex.search(content) is not None


def compose_body(current_body: str, prepend: str = "", append: str = "") -> str:
    """Build the new release body.

    Non-empty pieces are joined by a blank line, prepend first:
        compose_body("B", "A", "C") == "A\\n\\nB\\n\\nC"
    """
    new_body = current_body

    if prepend:
        new_body = prepend + (SEPARATOR + current_body if current_body else "")

    if append:
        base = new_body or current_body
        new_body = base + (SEPARATOR if base else "") + append

    return new_body


async def resolve_release(
    client: ReleaseClientProtocol,
    repo: RepoRef,
    release_id: str,
    tag_name: str,
) -> Release:
    """Get a release by ID, falling back to the tag name.

    Only one lookup is made: release_id wins whenever it is non-empty.

    Raises:
        ConfigurationError: If neither identifier is given, or the ID is
            not an integer
    """
    if release_id:
        if not RELEASE_ID_RE.fullmatch(release_id.strip()):
            raise ConfigurationError(f"release-id must be an integer, got {release_id!r}")
        numeric_id = int(release_id.strip())
        logger.info("fetching_release_by_id", repo=str(repo), release_id=numeric_id)
        return await client.get_release(repo, numeric_id)

    if tag_name:
        logger.info("fetching_release_by_tag", repo=str(repo), tag=tag_name)
        return await client.get_release_by_tag(repo, tag_name)

    raise ConfigurationError("No release-id or tag-name provided")


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class ReleaseNotesUpdater:
    """Runs one prepend/append update against a single release.

    Usage:
        updater = ReleaseNotesUpdater(config)
        updated_body = await updater.run()
    """

    def __init__(
        self,
        config: UpdaterInput,
        client: ReleaseClientProtocol | None = None,
    ) -> None:
        """Initialize the updater.

        Args:
            config: Step configuration
            client: Release API client. A GitHubReleaseClient built from
                    the config's token and API URL if None.
        """
        self.config = config
        self.client = client or GitHubReleaseClient(
            token=config.github_token, base_url=config.api_url
        )

    async def run(self) -> str:
        """Update the release notes and return the resulting body.

        Returns "" without touching the API when there is nothing to add,
        and the unchanged body when the skip pattern matches.
        """
        config = self.config
        if not config.has_content:
            message = "No content to add (both append and prepend are empty)"
            logger.warning("nothing_to_add")
            actions.warning(message)
            return ""

        release = await resolve_release(
            self.client, config.repository, config.release_id, config.tag_name
        )
        current_body = release.body
        logger.info("release_fetched", release_id=release.id, body_length=len(current_body))

        if should_skip(current_body, config.skip_if_contains):
            logger.info(
                "update_skipped",
                release_id=release.id,
                reason="release notes already contain the specified pattern",
                pattern=config.skip_if_contains,
            )
            return current_body

        new_body = compose_body(current_body, config.prepend, config.append)
        logger.info(
            "body_composed",
            prepend=bool(config.prepend),
            append=bool(config.append),
        )

        await self.client.update_release(config.repository, release.id, new_body)
        logger.info("release_updated", release_id=release.id, body_length=len(new_body))
        return new_body


# ---------------------------------------------------------------------------
# CLI Entry Point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Prepend and/or append text to a GitHub release's notes.",
        epilog="Options default to the INPUT_* variables of a GitHub Actions step.",
    )
    parser.add_argument("--append", help="Text appended to the release body")
    parser.add_argument("--prepend", help="Text prepended to the release body")
    parser.add_argument(
        "--skip-if-contains",
        help="Regex (or literal text) that skips the update when found in the body",
    )
    parser.add_argument("--release-id", help="Numeric release ID (wins over --tag-name)")
    parser.add_argument("--tag-name", help="Tag of the release to update")
    parser.add_argument("--github-token", help="GitHub token with write access")
    parser.add_argument("--repository", help="owner/name (default: $GITHUB_REPOSITORY)")
    parser.add_argument("--api-url", help="GitHub API URL (default: $GITHUB_API_URL)")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Usage (in a workflow step, inputs come from the environment):
        release-notes-updater
    Locally:
        release-notes-updater --repository myorg/api --tag-name v1.2.0 \\
            --append "Built by CI" --github-token "$GITHUB_TOKEN"

    Returns:
        Process exit status: 0 on success, skip or no-op; 1 on failure
    """
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        config = UpdaterInput.from_env(
            append=args.append,
            prepend=args.prepend,
            skip_if_contains=args.skip_if_contains,
            release_id=args.release_id,
            tag_name=args.tag_name,
            github_token=args.github_token,
            repository=args.repository,
            api_url=args.api_url,
        )
        updated_body = asyncio.run(ReleaseNotesUpdater(config).run())
    except ReleaseNotesError as e:
        logger.error("update_failed", error=str(e), error_type=type(e).__name__)
        actions.error(str(e))
        return 1

    if config.has_content:
        actions.set_output("updated-body", updated_body)
    return 0


if __name__ == "__main__":
    sys.exit(main())
