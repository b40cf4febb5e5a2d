"""Core data transfer objects shared across layers.

Request envelopes themselves are ``ask_sdk_model`` objects; this module only
names the request types the engine routes on and carries HTTP metadata.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

LAUNCH_REQUEST = "LaunchRequest"
INTENT_REQUEST = "IntentRequest"
SESSION_ENDED_REQUEST = "SessionEndedRequest"
APL_USER_EVENT = "Alexa.Presentation.APL.UserEvent"


@dataclass(slots=True)
class RequestContext:
    """Metadata describing an inbound API request."""

    correlation_id: str
    path: str
    method: str
    user_agent: Optional[str] = None


__all__ = [
    "APL_USER_EVENT",
    "INTENT_REQUEST",
    "LAUNCH_REQUEST",
    "SESSION_ENDED_REQUEST",
    "RequestContext",
]
