from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from parley.cli import app, load_activities
from parley.errors import ActivityFormatError

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_cwd(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)


def test_run_echoes_message() -> None:
    result = runner.invoke(app, ["run", "hello there"])

    assert result.exit_code == 0, result.output
    assert "echo: hello there" in result.output


def test_replay_dispatches_each_line(tmp_path: Path) -> None:
    lines = [
        json.dumps({"type": "state_change", "members_added": [{"id": "helper"}, {"id": "a1", "name": "alice"}]}),
        "",
        json.dumps({"type": "message", "text": "ping"}),
        json.dumps({"type": "typing"}),
    ]
    recording = tmp_path / "turns.jsonl"
    recording.write_text("\n".join(lines), encoding="utf-8")

    result = runner.invoke(app, ["replay", str(recording), "--bot-id", "helper"])

    assert result.exit_code == 0, result.output
    assert "Welcome, alice!" in result.output
    assert "Welcome, helper" not in result.output
    assert "echo: ping" in result.output


def test_replay_reads_stdin() -> None:
    result = runner.invoke(app, ["replay", "-"], input='{"type": "message", "text": "from stdin"}\n')

    assert result.exit_code == 0, result.output
    assert "echo: from stdin" in result.output


def test_replay_rejects_invalid_line(tmp_path: Path) -> None:
    recording = tmp_path / "broken.jsonl"
    recording.write_text('{"type": "message"}\n{not json\n', encoding="utf-8")

    result = runner.invoke(app, ["replay", str(recording)])

    assert result.exit_code == 1
    assert "broken.jsonl:2" in result.output


def test_replay_reports_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["replay", str(tmp_path / "nope.jsonl")])

    assert result.exit_code == 1
    assert "cannot read" in result.output


def test_types_lists_routed_tags() -> None:
    result = runner.invoke(app, ["types"])

    assert result.exit_code == 0
    assert result.output.split() == [
        "message",
        "state_change",
        "system_notification",
        "data_deletion_request",
        "relationship_change",
    ]


def test_load_activities_names_source_and_line() -> None:
    with pytest.raises(ActivityFormatError) as exc_info:
        load_activities(["", '{"type": "message", "members_added": "nobody"}'], "inline")

    assert exc_info.value.source == "inline:2"


def test_replay_rejects_undecodable_file(tmp_path: Path) -> None:
    recording = tmp_path / "binary.jsonl"
    recording.write_bytes(b'{"type": "message", "text": "\xff"}\n')

    result = runner.invoke(app, ["replay", str(recording)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "not valid UTF-8" in result.output
    assert "Traceback" not in result.output
