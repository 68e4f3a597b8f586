"""Shared fixtures for the release notes updater tests."""

from __future__ import annotations

import os

import pytest
import structlog

from release_notes_updater.schemas import RepoRef, UpdaterInput


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Strip any Actions variables leaking in from the machine running the tests."""
    for name in list(os.environ):
        if name.startswith("INPUT_") or name in (
            "GITHUB_OUTPUT",
            "GITHUB_REPOSITORY",
            "GITHUB_API_URL",
        ):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def plain_structlog(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep structlog on its uncached defaults so capsys/capture_logs work."""
    structlog.reset_defaults()
    monkeypatch.setattr("release_notes_updater.updater.setup_logging", lambda: None)


@pytest.fixture
def repo() -> RepoRef:
    return RepoRef(owner="myorg", name="api")


@pytest.fixture
def make_config(repo: RepoRef):
    """Factory for UpdaterInput with a token and repository filled in."""

    def _make(**values: str) -> UpdaterInput:
        return UpdaterInput(github_token="ghp_test", repository=repo, **values)

    return _make
