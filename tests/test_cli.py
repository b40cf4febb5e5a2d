"""Tests for the sticky-notes CLI."""

import json

import pytest
from typer.testing import CliRunner

from sticky_notes_engine.cli import main_app
from sticky_notes_engine.cli.events import build_sample_envelope, sample_kinds
from sticky_notes_engine.core.directives import HTML_INTERFACE

runner = CliRunner()


@pytest.mark.parametrize("kind", sample_kinds())
def test_sample_envelopes_are_valid_json(kind: str) -> None:
    result = runner.invoke(main_app, ["events", "sample", kind])

    assert result.exit_code == 0
    envelope = json.loads(result.stdout)
    assert envelope["request"]["locale"] == "en-US"


def test_sample_without_html_drops_interface() -> None:
    envelope = build_sample_envelope("launch", html=False)

    interfaces = envelope["context"]["System"]["device"]["supportedInterfaces"]
    assert HTML_INTERFACE not in interfaces


def test_sample_rejects_unknown_kind() -> None:
    result = runner.invoke(main_app, ["events", "sample", "bogus"])

    assert result.exit_code == 1


def test_invoke_replays_event_file(tmp_path) -> None:
    event_file = tmp_path / "widget-ready.json"
    event = build_sample_envelope("widget-ready")
    event["request"]["timestamp"] = "2020-01-01T00:00:00Z"
    event_file.write_text(json.dumps(event), encoding="utf-8")

    result = runner.invoke(main_app, ["events", "invoke", str(event_file)])

    assert result.exit_code == 0
    assert "Alexa.Presentation.HTML.Start" in result.stdout


def test_invoke_rejects_invalid_file(tmp_path) -> None:
    event_file = tmp_path / "broken.json"
    event_file.write_text("{}", encoding="utf-8")

    result = runner.invoke(main_app, ["events", "invoke", str(event_file)])

    assert result.exit_code == 1
