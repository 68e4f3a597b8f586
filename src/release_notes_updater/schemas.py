"""Pydantic models for the release notes updater.

These schemas define what flows through a single run:
- UpdaterInput: the step configuration, built once at entry
- RepoRef: the owner/name pair the release lives in
- Release: the subset of a GitHub release we read and write

Key design decisions:
- The configuration is an explicit object passed to the updater, never
  read from the environment deep inside the logic
- A null release body from the API is normalized to "" at the edge
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field, ValidationError, field_validator

from release_notes_updater.actions import get_input
from release_notes_updater.errors import ConfigurationError

DEFAULT_API_URL = "https://api.github.com"


# ---------------------------------------------------------------------------
# Repository & Release
# ---------------------------------------------------------------------------


class RepoRef(BaseModel):
    """A GitHub repository reference.

    Attributes:
        owner: User or organization login (e.g., "myorg")
        name: Repository name (e.g., "api")
    """

    owner: str = Field(..., min_length=1, description="Repository owner")
    name: str = Field(..., min_length=1, description="Repository name")

    @classmethod
    def parse(cls, value: str) -> RepoRef:
        """Build a RepoRef from "owner/name".

        Raises:
            ConfigurationError: If the value is not in owner/name form
        """
        owner, sep, name = value.strip().partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ConfigurationError(
                f"Repository must be in owner/name format, got {value!r}"
            )
        return cls(owner=owner, name=name)

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


class Release(BaseModel):
    """A GitHub release, reduced to what the updater needs.

    Attributes:
        id: Numeric release ID
        body: Release notes text ("" when GitHub reports none)
    """

    id: int = Field(..., description="GitHub release ID")
    body: str = Field("", description="Release notes markdown")

    @field_validator("body", mode="before")
    @classmethod
    def none_body_is_empty(cls, v: object) -> object:
        return "" if v is None else v


# ---------------------------------------------------------------------------
# Step configuration
# ---------------------------------------------------------------------------


class UpdaterInput(BaseModel):
    """Configuration for one updater run.

    Attributes:
        append: Text appended to the release body
        prepend: Text prepended to the release body
        skip_if_contains: Regex (or literal, if not a valid regex) that
            makes the run a no-op when found in the current body
        release_id: Numeric release ID, as given by the workflow
        tag_name: Tag of the release, used when release_id is empty
        github_token: Token used to authenticate against the API
        repository: Repository that owns the release
        api_url: Base URL of the GitHub REST API
    """

    append: str = ""
    prepend: str = ""
    skip_if_contains: str = ""
    release_id: str = ""
    tag_name: str = ""
    github_token: str = Field(..., repr=False)
    repository: RepoRef
    api_url: str = DEFAULT_API_URL

    @field_validator("github_token")
    @classmethod
    def token_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Input required and not supplied: github-token")
        return v

    @field_validator("api_url")
    @classmethod
    def api_url_is_http(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("api-url must start with http:// or https://")
        return v.rstrip("/")

    @property
    def has_content(self) -> bool:
        """Whether there is anything to add to the release."""
        return bool(self.append or self.prepend)

    @classmethod
    def build(cls, **values: object) -> UpdaterInput:
        """Validate values into an UpdaterInput.

        Raises:
            ConfigurationError: If validation fails
        """
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            messages = "; ".join(err["msg"].removeprefix("Value error, ") for err in exc.errors())
            raise ConfigurationError(f"Invalid configuration: {messages}") from exc

    @classmethod
    def from_env(cls, **overrides: str | None) -> UpdaterInput:
        """Read the step inputs from the GitHub Actions environment.

        Inputs come from INPUT_* variables; the repository and API URL come
        from GITHUB_REPOSITORY and GITHUB_API_URL. Any override that is not
        None wins over the environment; overrides are trimmed like inputs.

        Raises:
            ConfigurationError: If a required value is missing or invalid
        """
        values: dict[str, str] = {
            "append": get_input("append"),
            "prepend": get_input("prepend"),
            "skip_if_contains": get_input("skip-if-contains"),
            "release_id": get_input("release-id"),
            "tag_name": get_input("tag-name"),
            "github_token": get_input("github-token"),
            "repository": os.environ.get("GITHUB_REPOSITORY", ""),
            "api_url": os.environ.get("GITHUB_API_URL", "") or DEFAULT_API_URL,
        }
        values.update({k: v.strip() for k, v in overrides.items() if v is not None})

        if not values["github_token"]:
            raise ConfigurationError("Input required and not supplied: github-token")
        if not values["repository"]:
            raise ConfigurationError(
                "Repository not set: pass --repository or set GITHUB_REPOSITORY"
            )

        repository = RepoRef.parse(values.pop("repository"))
        return cls.build(repository=repository, **values)
