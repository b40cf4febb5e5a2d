"""Tests for the serverless entry point."""

from types import SimpleNamespace

import pytest
from ask_sdk_runtime.exceptions import AskSdkException

from sticky_notes_engine.apps import lambda_handler
from sticky_notes_engine.cli.events import build_sample_envelope
from sticky_notes_engine.core.config import config as app_config
from sticky_notes_engine.core.exceptions import InvalidEnvelopeError


def test_handler_returns_plain_response_dict() -> None:
    context = SimpleNamespace(aws_request_id="lambda-req-1")

    result = lambda_handler.handler(build_sample_envelope("widget-tap"), context)

    assert result["version"] == "1.0"
    assert result["response"]["outputSpeech"]["ssml"] == "<speak>Loading.</speak>"
    assert result["response"]["directives"][0]["token"] == "LOADING_SCREEN"


def test_handler_reuses_service_container() -> None:
    lambda_handler.handler(build_sample_envelope("launch"))
    first = lambda_handler._get_services()  # pylint: disable=protected-access
    lambda_handler.handler(build_sample_envelope("launch"))

    assert lambda_handler._get_services() is first  # pylint: disable=protected-access


def test_handler_raises_for_malformed_event() -> None:
    with pytest.raises(InvalidEnvelopeError):
        lambda_handler.handler({"request": {}})


def test_handler_enforces_application_id(monkeypatch) -> None:
    """A container built with a pinned id refuses events for other skills."""
    monkeypatch.setattr(lambda_handler, "_services", None)
    monkeypatch.setattr(app_config, "SKILL_APPLICATION_ID", "amzn1.ask.skill.other")

    with pytest.raises(AskSdkException):
        lambda_handler.handler(build_sample_envelope("launch"))
