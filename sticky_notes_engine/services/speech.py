"""Localized speech for every utterance the skill can say.

Utterances are kept in a pre-translated JSON catalog keyed by message key and
ISO 639-1 language code. The language comes from the request locale
(``en-US`` → ``en``); anything not in the catalog falls back to English.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from sticky_notes_engine.core.logging import get_logger

logger = get_logger(__name__)

# Message key constants
LOADING = "LOADING"
OPENING_WEB_APP = "OPENING_WEB_APP"
HTML_UNSUPPORTED = "HTML_UNSUPPORTED"
PROCESSING_ERROR = "PROCESSING_ERROR"
HELP = "HELP"
HELP_REPROMPT = "HELP_REPROMPT"
FALLBACK = "FALLBACK"
GOODBYE = "GOODBYE"

DEFAULT_LANGUAGE = "en"

_SPEECH_MESSAGES_PATH = Path(__file__).parent / "speech_messages_data.json"
with open(_SPEECH_MESSAGES_PATH, encoding="utf-8") as f:
    _SPEECH_MESSAGES: dict[str, dict[str, str]] = json.load(f)


def language_from_locale(locale: Optional[str]) -> str:
    """Reduce a platform locale such as ``de-DE`` to its language code."""
    if not locale:
        return DEFAULT_LANGUAGE
    language = locale.replace("_", "-").split("-", 1)[0].strip().lower()
    return language or DEFAULT_LANGUAGE


def supported_languages() -> set[str]:
    """Languages that have a translation for every message key."""
    languages: Optional[set[str]] = None
    for translations in _SPEECH_MESSAGES.values():
        keys = set(translations)
        languages = keys if languages is None else languages & keys
    return languages or {DEFAULT_LANGUAGE}


def get_speech(message_key: str, locale: Optional[str] = None) -> str:
    """Return the utterance for ``message_key`` in the locale's language.

    Raises:
        KeyError: if ``message_key`` is not in the catalog.
    """
    translations = _SPEECH_MESSAGES[message_key]
    language = language_from_locale(locale)
    text = translations.get(language)
    if text is None:
        logger.debug(
            "No '%s' translation for message '%s'; using %s.",
            language,
            message_key,
            DEFAULT_LANGUAGE,
        )
        text = translations[DEFAULT_LANGUAGE]
    return text


__all__ = [
    "DEFAULT_LANGUAGE",
    "FALLBACK",
    "GOODBYE",
    "HELP",
    "HELP_REPROMPT",
    "HTML_UNSUPPORTED",
    "LOADING",
    "OPENING_WEB_APP",
    "PROCESSING_ERROR",
    "get_speech",
    "language_from_locale",
    "supported_languages",
]
