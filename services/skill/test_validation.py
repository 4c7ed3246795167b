"""Tests for the input validator and language resolution."""
import pytest

from langlearn.config import LANGUAGES, SUPPORTED_LANGUAGES, code_for, voice_for_code
from langlearn.errors import ValidationError
from langlearn.utils.validation import InputValidator, default_dictionary, normalize


def test_normalize_strips_punctuation_and_whitespace():
    assert normalize("  Hello,   there!  ") == ["hello", "there"]
    assert normalize("snake_case") == ["snakecase"]
    assert normalize("?!") == []


@pytest.mark.parametrize("phrase", [
    "Hello there",
    "hello THERE!",
    "Good morning, the cat is black.",
    "hello french",
    "Thank you, Japanese",
])
def test_dictionary_phrases_are_accepted(validator, phrase):
    assert validator.is_valid(phrase)


@pytest.mark.parametrize("phrase", ["xyzzy qux", "hello xyzzy", "bonjour", "the cat is noir"])
def test_phrases_with_foreign_tokens_are_rejected(validator, phrase):
    assert not validator.is_valid(phrase)


def test_language_names_count_as_words(validator):
    assert validator.is_valid(" ".join(sorted(SUPPORTED_LANGUAGES)))


def test_empty_input_is_valid(validator):
    assert validator.is_valid("")
    assert validator.is_valid(" ... ")


def test_validation_is_idempotent_and_pure(validator):
    phrase = "Hello, there!"
    assert validator.is_valid(phrase) == validator.is_valid(phrase)
    assert phrase == "Hello, there!"


def test_resolve_language_returns_profile(validator):
    profile = validator.resolve_language(" French ")
    assert profile.name == "french"
    assert profile.code == "fr"
    assert profile.voice == "Mathieu"


@pytest.mark.parametrize("name,message", [
    (None, "I didn't catch which language you want."),
    ("klingon", "This language is invalid."),
    ("English", "Translating from English to English is not necessary."),
    ("dutch", "This language is not supported by this skill."),
])
def test_resolve_language_rejections(validator, name, message):
    with pytest.raises(ValidationError) as exc_info:
        validator.resolve_language(name)
    assert exc_info.value.message == message


def test_every_supported_language_resolves(validator):
    for name in SUPPORTED_LANGUAGES:
        profile = validator.resolve_language(name)
        assert profile.name != "english"
        assert code_for(name) == profile.code
        assert voice_for_code(profile.code) == profile.voice


def test_language_table_is_read_only():
    with pytest.raises(TypeError):
        LANGUAGES["klingon"] = LANGUAGES["french"]


def test_default_dictionary_is_loaded_once():
    assert default_dictionary() is default_dictionary()
    validator = InputValidator()
    assert validator.is_valid("the cat")
    assert not validator.is_valid("xyzzy qux")


@pytest.mark.parametrize("phrase", [
    "I like cats",
    "Goodbye",
    "Two beers please",
    "Where are the books?",
    "These words are in two languages",
    "My translations were wrong",
    "She walked to the station yesterday",
])
def test_default_dictionary_accepts_inflected_words(phrase):
    assert InputValidator().is_valid(phrase)
