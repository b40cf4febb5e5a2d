"""Request handlers for the sticky notes skill and the widget launch handshake.

Opening the web app from a widget tap takes two rounds. The tap first renders
a loading screen; that screen's mount callback sends ``INTERNAL_LAUNCH_CMD``
back, and only then is the HTML app started. Launching straight from the tap
leaves a blank screen while the device switches modality.
"""

from __future__ import annotations

import json

from ask_sdk_core.dispatch_components import (
    AbstractExceptionHandler,
    AbstractRequestHandler,
    AbstractRequestInterceptor,
)
from ask_sdk_core.handler_input import HandlerInput
from ask_sdk_core.response_helper import ResponseFactory
from ask_sdk_core.serialize import DefaultSerializer
from ask_sdk_core.utils import (
    get_locale,
    get_request_type,
    get_supported_interfaces,
    is_intent_name,
    is_request_type,
)
from ask_sdk_model import Response

from sticky_notes_engine.core.config import config
from sticky_notes_engine.core.directives import (
    HTML_INTERFACE,
    INTERNAL_LAUNCH_CMD,
    WIDGET_TAP_ARGUMENTS,
    build_html_start_directive,
    build_loading_screen_directive,
)
from sticky_notes_engine.core.logging import bind_skill_event, get_logger
from sticky_notes_engine.core.models import (
    APL_USER_EVENT,
    LAUNCH_REQUEST,
    SESSION_ENDED_REQUEST,
)
from sticky_notes_engine.services import speech
from sticky_notes_engine.utils.identifiers import log_safe_id

logger = get_logger(__name__)

CREATE_NOTE_INTENT = "CreateNoteIntent"
HELP_INTENT = "AMAZON.HelpIntent"
CANCEL_INTENT = "AMAZON.CancelIntent"
STOP_INTENT = "AMAZON.StopIntent"
FALLBACK_INTENT = "AMAZON.FallbackIntent"

_serializer = DefaultSerializer()


def _raw_request_json(handler_input: HandlerInput) -> str:
    return json.dumps(_serializer.serialize(handler_input.request_envelope.request), indent=2)


def supports_html(handler_input: HandlerInput) -> bool:
    """True when the device reports the HTML presentation interface.

    The interface entry is often an empty object, so presence of the key is
    what counts, not its contents.
    """
    interfaces = get_supported_interfaces(handler_input)
    return interfaces is not None and interfaces.alexa_presentation_html is not None


def start_web_app(handler_input: HandlerInput) -> Response:
    """Launch the web app on capable devices, speak a refusal on the rest."""
    locale = get_locale(handler_input)
    builder = handler_input.response_builder
    if supports_html(handler_input):
        logger.info("Sending %s.Start directive...", HTML_INTERFACE)
        return (
            builder.speak(speech.get_speech(speech.OPENING_WEB_APP, locale))
            .add_directive(
                build_html_start_directive(config.WEB_APP_URL, config.WEB_APP_INITIAL_MODE)
            )
            .response
        )

    logger.info("Device lacks %s; answering with speech only.", HTML_INTERFACE)
    return builder.speak(speech.get_speech(speech.HTML_UNSUPPORTED, locale)).response


class SkillEventLogContextInterceptor(AbstractRequestInterceptor):
    """Tag log records with pseudonyms of the caller's account and device."""

    def process(self, handler_input: HandlerInput) -> None:
        envelope = handler_input.request_envelope
        system = envelope.context.system if envelope.context else None
        user_id = system.user.user_id if system and system.user else None
        device_id = system.device.device_id if system and system.device else None
        bind_skill_event(
            log_user_id=log_safe_id(user_id, secret=config.LOG_PSEUDONYM_SECRET),
            log_device_id=log_safe_id(device_id, secret=config.LOG_PSEUDONYM_SECRET),
            request_id=envelope.request.request_id,
        )


class RequestLogInterceptor(AbstractRequestInterceptor):
    """Log the type and the raw payload of every inbound event."""

    def process(self, handler_input: HandlerInput) -> None:
        logger.info("input request type: %s", get_request_type(handler_input))
        logger.info("input request json: %s", _raw_request_json(handler_input))


class LaunchRequestHandler(AbstractRequestHandler):
    """Voice launch ("open sticky notes") goes straight to the web app."""

    def can_handle(self, handler_input: HandlerInput) -> bool:
        return is_request_type(LAUNCH_REQUEST)(handler_input)

    def handle(self, handler_input: HandlerInput) -> Response:
        logger.info("voice launch request")
        return start_web_app(handler_input)


class WidgetUserEventHandler(AbstractRequestHandler):
    """Both rounds of the widget handshake arrive as APL user events.

    A first argument equal to ``INTERNAL_LAUNCH_CMD`` is the loading screen's
    mount callback. Anything else, including widgets still sending the older
    ``LaunchWebApp`` argument and events without arguments, is a fresh tap.
    """

    def can_handle(self, handler_input: HandlerInput) -> bool:
        return is_request_type(APL_USER_EVENT)(handler_input)

    def handle(self, handler_input: HandlerInput) -> Response:
        args = handler_input.request_envelope.request.arguments or []
        logger.info("received widget user event with args: %s", args)
        event_name = args[0] if args else None

        if event_name == INTERNAL_LAUNCH_CMD:
            logger.info("loading screen mounted; transitioning to web app")
            return start_web_app(handler_input)

        if event_name not in WIDGET_TAP_ARGUMENTS:
            logger.warning("unrecognized widget argument %r; treating as tap", event_name)
        logger.info("rendering loading screen to bridge modality")
        return (
            handler_input.response_builder.speak(
                speech.get_speech(speech.LOADING, get_locale(handler_input))
            )
            .add_directive(build_loading_screen_directive(config.LOADING_SCREEN_TEXT))
            .response
        )


class CreateNoteIntentHandler(AbstractRequestHandler):
    def can_handle(self, handler_input: HandlerInput) -> bool:
        return is_intent_name(CREATE_NOTE_INTENT)(handler_input)

    def handle(self, handler_input: HandlerInput) -> Response:
        return start_web_app(handler_input)


class SessionEndedRequestHandler(AbstractRequestHandler):
    """Acknowledge session end; the platform ignores any speech here."""

    def can_handle(self, handler_input: HandlerInput) -> bool:
        return is_request_type(SESSION_ENDED_REQUEST)(handler_input)

    def handle(self, handler_input: HandlerInput) -> Response:
        request = handler_input.request_envelope.request
        logger.info("session ended reason: %s", _serializer.serialize(request.reason))
        if request.error is not None:
            logger.warning("session ended with error: %s", _serializer.serialize(request.error))
        return handler_input.response_builder.response


class HelpIntentHandler(AbstractRequestHandler):
    def can_handle(self, handler_input: HandlerInput) -> bool:
        return is_intent_name(HELP_INTENT)(handler_input)

    def handle(self, handler_input: HandlerInput) -> Response:
        locale = get_locale(handler_input)
        return (
            handler_input.response_builder.speak(speech.get_speech(speech.HELP, locale))
            .ask(speech.get_speech(speech.HELP_REPROMPT, locale))
            .response
        )


class CancelAndStopIntentHandler(AbstractRequestHandler):
    def can_handle(self, handler_input: HandlerInput) -> bool:
        return is_intent_name(CANCEL_INTENT)(handler_input) or is_intent_name(STOP_INTENT)(
            handler_input
        )

    def handle(self, handler_input: HandlerInput) -> Response:
        return (
            handler_input.response_builder.speak(
                speech.get_speech(speech.GOODBYE, get_locale(handler_input))
            )
            .set_should_end_session(True)
            .response
        )


class FallbackIntentHandler(AbstractRequestHandler):
    def can_handle(self, handler_input: HandlerInput) -> bool:
        return is_intent_name(FALLBACK_INTENT)(handler_input)

    def handle(self, handler_input: HandlerInput) -> Response:
        locale = get_locale(handler_input)
        return (
            handler_input.response_builder.speak(speech.get_speech(speech.FALLBACK, locale))
            .ask(speech.get_speech(speech.HELP_REPROMPT, locale))
            .response
        )


class CatchAllErrorHandler(AbstractExceptionHandler):
    """Last line of defense: log the failure and apologize."""

    def can_handle(self, handler_input: HandlerInput, exception: Exception) -> bool:
        del handler_input, exception
        return True

    def handle(self, handler_input: HandlerInput, exception: Exception) -> Response:
        logger.error("error handled: %s", exception, exc_info=exception)
        logger.error("unhandled request json: %s", _raw_request_json(handler_input))
        # Fresh builder so a half-built reply never leaks into the apology.
        handler_input.response_builder = ResponseFactory()
        return handler_input.response_builder.speak(
            speech.get_speech(speech.PROCESSING_ERROR, get_locale(handler_input))
        ).response


def default_request_interceptors() -> list[AbstractRequestInterceptor]:
    return [SkillEventLogContextInterceptor(), RequestLogInterceptor()]


def default_request_handlers() -> list[AbstractRequestHandler]:
    """Handlers in the order the router scans them."""
    return [
        LaunchRequestHandler(),
        WidgetUserEventHandler(),
        CreateNoteIntentHandler(),
        SessionEndedRequestHandler(),
        HelpIntentHandler(),
        CancelAndStopIntentHandler(),
        FallbackIntentHandler(),
    ]


__all__ = [
    "CancelAndStopIntentHandler",
    "CatchAllErrorHandler",
    "CreateNoteIntentHandler",
    "FallbackIntentHandler",
    "HelpIntentHandler",
    "LaunchRequestHandler",
    "RequestLogInterceptor",
    "SessionEndedRequestHandler",
    "SkillEventLogContextInterceptor",
    "WidgetUserEventHandler",
    "default_request_handlers",
    "default_request_interceptors",
    "start_web_app",
    "supports_html",
]
