"""UI directives emitted by the widget handshake and the web app launch."""

from __future__ import annotations

from typing import Any

from ask_sdk_model.interfaces.alexa.presentation.apl import RenderDocumentDirective
from ask_sdk_model.interfaces.alexa.presentation.html import (
    StartDirective,
    StartRequest,
    StartRequestMethod,
)

HTML_INTERFACE = "Alexa.Presentation.HTML"
APL_INTERFACE = "Alexa.Presentation.APL"

APL_RENDER_DOCUMENT = "Alexa.Presentation.APL.RenderDocument"
HTML_START = "Alexa.Presentation.HTML.Start"

# Argument the loading screen sends back once it has mounted on the device.
INTERNAL_LAUNCH_CMD = "INTERNAL_LAUNCH_CMD"
LOADING_SCREEN_TOKEN = "LOADING_SCREEN"

# Widget tap arguments seen in the wild. Any argument other than
# INTERNAL_LAUNCH_CMD is handled as a tap, these are listed for logging only.
WIDGET_TAP_ARGUMENTS = ("OpenWidget", "LaunchWebApp")

APL_DOCUMENT_VERSION = "2023.2"
ALEXA_LAYOUTS_VERSION = "1.7.0"


def build_loading_screen_document(text: str) -> dict[str, Any]:
    """APL document whose mount callback signals the backend to launch the web app."""
    return {
        "type": "APL",
        "version": APL_DOCUMENT_VERSION,
        "import": [{"name": "alexa-layouts", "version": ALEXA_LAYOUTS_VERSION}],
        "onMount": [
            {
                "type": "SendEvent",
                "arguments": [INTERNAL_LAUNCH_CMD],
                "interactionMode": "STANDARD",
            }
        ],
        "mainTemplate": {
            "items": [
                {
                    "type": "Container",
                    "width": "100%",
                    "height": "100%",
                    "alignItems": "center",
                    "justifyContent": "center",
                    "items": [
                        {
                            "type": "Text",
                            "text": text,
                            "fontSize": "40dp",
                            "color": "white",
                        }
                    ],
                }
            ]
        },
    }


def build_loading_screen_directive(text: str) -> RenderDocumentDirective:
    return RenderDocumentDirective(
        token=LOADING_SCREEN_TOKEN,
        document=build_loading_screen_document(text),
    )


def build_html_start_directive(uri: str, mode: str) -> StartDirective:
    """Directive that swaps the device into the hosted web app."""
    return StartDirective(
        data={"initialData": {"mode": mode}},
        request=StartRequest(uri=uri, method=StartRequestMethod.GET),
    )


__all__ = [
    "ALEXA_LAYOUTS_VERSION",
    "APL_DOCUMENT_VERSION",
    "APL_INTERFACE",
    "APL_RENDER_DOCUMENT",
    "HTML_INTERFACE",
    "HTML_START",
    "INTERNAL_LAUNCH_CMD",
    "LOADING_SCREEN_TOKEN",
    "WIDGET_TAP_ARGUMENTS",
    "build_html_start_directive",
    "build_loading_screen_directive",
    "build_loading_screen_document",
]
