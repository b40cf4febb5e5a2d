"""Tests for the localized speech catalog."""

import pytest

from sticky_notes_engine.services import speech


@pytest.mark.parametrize(
    "locale, expected",
    [("en-US", "en"), ("de_DE", "de"), ("FR-ca", "fr"), (None, "en"), ("", "en")],
)
def test_language_from_locale(locale, expected) -> None:
    assert speech.language_from_locale(locale) == expected


def test_english_texts_match_skill_prompts() -> None:
    """English is the reference language for every prompt."""
    assert speech.get_speech(speech.LOADING) == "Loading."
    assert speech.get_speech(speech.OPENING_WEB_APP, "en-GB") == "Opening Sticky Notes"
    assert speech.get_speech(speech.PROCESSING_ERROR, "en-US") == (
        "Sorry, I had trouble doing what you asked."
    )


def test_unknown_language_falls_back_to_english() -> None:
    assert speech.get_speech(speech.GOODBYE, "ja-JP") == "Goodbye!"


def test_translated_locale_is_used() -> None:
    assert speech.get_speech(speech.LOADING, "es-MX") == "Cargando."


def test_unknown_message_key_raises() -> None:
    with pytest.raises(KeyError):
        speech.get_speech("NOT_A_MESSAGE")


def test_every_message_covers_the_same_languages() -> None:
    """The catalog ships complete translations for each supported language."""
    assert speech.supported_languages() == {"en", "es", "de", "fr"}
