"""Tests for the GitHub Actions runner helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from release_notes_updater import actions


def test_get_input_maps_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INPUT_SKIP-IF-CONTAINS", "  DRAFT  ")
    monkeypatch.setenv("INPUT_MY_INPUT", "x")
    assert actions.get_input("skip-if-contains") == "DRAFT"
    assert actions.get_input("my input") == "x"
    assert actions.get_input("release-id") == ""


def test_annotations_escape_newlines(capsys) -> None:
    actions.warning("line one\nline two 100%")
    actions.error("boom")
    out = capsys.readouterr().out
    assert "::warning::line one%0Aline two 100%25\n" in out
    assert "::error::boom\n" in out


def test_set_output_multiline(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    output_file = tmp_path / "out"
    output_file.write_text("previous=1\n")
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))

    assert actions.set_output("updated-body", "A\n\nB") is True

    lines = output_file.read_text().splitlines()
    assert lines[0] == "previous=1"
    header, delimiter = lines[1].split("<<")
    assert header == "updated-body"
    assert lines[2:] == ["A", "", "B", delimiter]


def test_set_output_without_runner() -> None:
    assert actions.set_output("updated-body", "x") is False
