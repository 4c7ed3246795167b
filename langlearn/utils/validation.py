"""Input validation for spoken phrases and language names."""
from __future__ import annotations
from functools import lru_cache
from typing import AbstractSet, Iterable, List, Optional
import re

from spellchecker import SpellChecker

from langlearn.config import LANGUAGES, SOURCE_LANGUAGE, SUPPORTED_LANGUAGES, LanguageProfile
from langlearn.errors import ValidationError

_PUNCTUATION = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")


@lru_cache(maxsize=1)
def default_dictionary() -> AbstractSet[str]:
    """English word list with inflected forms, loaded once per process."""
    return frozenset(SpellChecker(language="en").word_frequency.keys())


def normalize(text: str) -> List[str]:
    cleaned = _PUNCTUATION.sub("", text)
    cleaned = _WHITESPACE.sub(" ", cleaned).strip().lower()
    return cleaned.split(" ") if cleaned else []


class InputValidator:
    """Accepts text made only of dictionary words and supported language names."""

    def __init__(self, vocabulary: Optional[Iterable[str]] = None):
        self._vocabulary = frozenset(w.lower() for w in vocabulary) if vocabulary is not None else None

    @property
    def vocabulary(self) -> AbstractSet[str]:
        if self._vocabulary is None:
            self._vocabulary = default_dictionary()
        return self._vocabulary

    def is_valid(self, text: str) -> bool:
        vocabulary = self.vocabulary
        return all(
            token in vocabulary or token in SUPPORTED_LANGUAGES
            for token in normalize(text)
        )

    def resolve_language(self, name: Optional[str]) -> LanguageProfile:
        """Map a spoken language name to its profile or raise ValidationError.

        Checks, in order: slot present, dictionary/language-name check,
        not the source language, supported by the translation table.
        """
        if name is None:
            raise ValidationError("I didn't catch which language you want.")
        language = name.strip().lower()
        if not self.is_valid(language):
            raise ValidationError("This language is invalid.")
        if language == SOURCE_LANGUAGE:
            raise ValidationError("Translating from English to English is not necessary.")
        profile = LANGUAGES.get(language)
        if profile is None:
            raise ValidationError("This language is not supported by this skill.")
        return profile
