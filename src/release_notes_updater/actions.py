"""Utilities for talking to the GitHub Actions runner.

The runner passes step inputs as INPUT_* environment variables, collects
step outputs from the file named by $GITHUB_OUTPUT, and turns specially
formatted stdout lines ("workflow commands") into annotations.

See
  * https://docs.github.com/en/actions/reference/workflow-commands-for-github-actions
"""

from __future__ import annotations

import os
import sys
import uuid

from release_notes_updater.logging_config import get_logger

logger = get_logger(__name__)


def _input_env_name(name: str) -> str:
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(name: str) -> str:
    """Return the trimmed value of a step input, or "" when unset.

    "skip-if-contains" is read from INPUT_SKIP-IF-CONTAINS: hyphens are kept,
    spaces become underscores.
    """
    return os.environ.get(_input_env_name(name), "").strip()


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _issue_command(command: str, message: str) -> None:
    sys.stdout.write(f"::{command}::{_escape_data(message)}\n")
    sys.stdout.flush()


def warning(message: str) -> None:
    """Emit a warning annotation for the current step."""
    _issue_command("warning", message)


def error(message: str) -> None:
    """Emit an error annotation for the current step."""
    _issue_command("error", message)


def set_output(name: str, value: str) -> bool:
    """Set a step output parameter.

    This appends to the file located at the $GITHUB_OUTPUT environment
    variable, using the heredoc form so multi-line values survive.

    Returns:
        True if the output was written, False if $GITHUB_OUTPUT is not set
    """
    output_file = os.environ.get("GITHUB_OUTPUT")
    if not output_file:
        logger.warning("github_output_not_set", output=name)
        return False

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    # The runner would end the value early if the delimiter appeared in it.
    if delimiter in name or delimiter in value:
        raise ValueError(f"Unexpected delimiter collision in output {name!r}")

    with open(output_file, "a", encoding="utf-8") as f:
        f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")

    logger.debug("output_set", output=name, length=len(value))
    return True
