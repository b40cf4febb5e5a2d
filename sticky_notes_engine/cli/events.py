"""CLI commands for exercising the skill router with local event files."""

from __future__ import annotations

import copy
import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import typer
from rich.console import Console

from sticky_notes_engine.core.directives import APL_INTERFACE, HTML_INTERFACE, INTERNAL_LAUNCH_CMD
from sticky_notes_engine.core.exceptions import InvalidEnvelopeError
from sticky_notes_engine.services import build_skill_router
from sticky_notes_engine.services.skill_service import serve_lambda_event

app = typer.Typer(name="events", help="Build and replay skill events")
console = Console()

SAMPLE_APPLICATION_ID = "amzn1.ask.skill.sample"

_SAMPLE_REQUESTS: dict[str, dict[str, Any]] = {
    "launch": {"type": "LaunchRequest"},
    "widget-tap": {
        "type": "Alexa.Presentation.APL.UserEvent",
        "source": {"type": "TouchWrapper", "handler": "Press"},
        "arguments": ["OpenWidget"],
    },
    "widget-ready": {
        "type": "Alexa.Presentation.APL.UserEvent",
        "token": "LOADING_SCREEN",
        "arguments": [INTERNAL_LAUNCH_CMD],
    },
    "create-note": {
        "type": "IntentRequest",
        "intent": {"name": "CreateNoteIntent", "confirmationStatus": "NONE"},
    },
    "help": {"type": "IntentRequest", "intent": {"name": "AMAZON.HelpIntent"}},
    "stop": {"type": "IntentRequest", "intent": {"name": "AMAZON.StopIntent"}},
    "session-ended": {"type": "SessionEndedRequest", "reason": "USER_INITIATED"},
}


def sample_kinds() -> list[str]:
    return sorted(_SAMPLE_REQUESTS)


def build_sample_envelope(kind: str, *, html: bool = True, locale: str = "en-US") -> dict[str, Any]:
    """Return a realistic request envelope of the given kind."""
    try:
        request = copy.deepcopy(_SAMPLE_REQUESTS[kind])
    except KeyError as exc:
        raise ValueError(f"unknown sample kind {kind!r}") from exc
    request.update(
        {
            "requestId": f"amzn1.echo-api.request.{uuid.uuid4()}",
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "locale": locale,
        }
    )
    interfaces: dict[str, Any] = {APL_INTERFACE: {"runtime": {"maxVersion": "2023.2"}}}
    if html:
        interfaces[HTML_INTERFACE] = {}
    application = {"applicationId": SAMPLE_APPLICATION_ID}
    user = {"userId": "amzn1.ask.account.sample"}
    return {
        "version": "1.0",
        "session": {
            "new": kind == "launch",
            "sessionId": f"amzn1.echo-api.session.{uuid.uuid4()}",
            "application": application,
            "user": user,
        },
        "context": {
            "System": {
                "application": application,
                "user": user,
                "device": {
                    "deviceId": "amzn1.ask.device.sample",
                    "supportedInterfaces": interfaces,
                },
            }
        },
        "request": request,
    }


@app.command("sample")
def sample(
    kind: str = typer.Argument(..., help="One of: " + ", ".join(sample_kinds())),
    html: bool = typer.Option(True, "--html/--no-html", help="Device supports the web app"),
    locale: str = typer.Option("en-US", "--locale", "-l", help="Request locale"),
) -> None:
    """Print a sample request envelope."""
    try:
        envelope = build_sample_envelope(kind, html=html, locale=locale)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    console.print_json(data=envelope)


@app.command("invoke")
def invoke(
    event_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON envelope"),
) -> None:
    """Dispatch an event file through the skill and print the reply.

    The skill is built without application id pinning so saved events from
    any skill can be replayed.
    """
    try:
        event = json.loads(event_file.read_text(encoding="utf-8"))
        response = serve_lambda_event(build_skill_router(), event)
    except (json.JSONDecodeError, InvalidEnvelopeError) as e:
        console.print(f"[red]Error:[/red] {event_file} is not a valid envelope: {e}")
        raise typer.Exit(1) from e
    console.print_json(data=response)


__all__ = ["app", "build_sample_envelope", "sample_kinds"]
