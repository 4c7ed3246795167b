from __future__ import annotations
from types import MappingProxyType
from typing import Optional
import random

from langlearn.utils.validation import InputValidator

FACTS = MappingProxyType({
    "chinese": (
        "Mandarin Chinese has more native speakers than any other language.",
        "Mandarin uses four main tones, so the same syllable can carry different meanings.",
        "Written Chinese is one of the oldest writing systems still in use.",
    ),
    "french": (
        "French is an official language on five continents.",
        "About a third of English vocabulary comes from French.",
        "French was the language of diplomacy for centuries.",
    ),
    "german": (
        "Every German noun is written with a capital letter.",
        "German is the most widely spoken native language in the European Union.",
        "German forms long compound words by joining nouns together.",
    ),
    "italian": (
        "Italian is the closest major language to Latin in its vocabulary.",
        "Much of the vocabulary of classical music comes from Italian.",
        "Modern standard Italian grew out of the Tuscan dialect of Florence.",
    ),
    "japanese": (
        "Japanese is written with three scripts: hiragana, katakana and kanji.",
        "Japanese verbs come at the end of the sentence.",
        "Japanese has different levels of politeness built into its grammar.",
    ),
    "portuguese": (
        "Most Portuguese speakers live in Brazil.",
        "Portuguese is spoken as an official language on four continents.",
        "Portuguese has nasal vowels that are rare among European languages.",
    ),
    "russian": (
        "Russian is written in the Cyrillic alphabet.",
        "Russian is one of the six official languages of the United Nations.",
        "Russian has no articles like 'a' or 'the'.",
    ),
    "spanish": (
        "Spanish is the official language of twenty countries.",
        "Mexico has the largest population of Spanish speakers in the world.",
        "Spanish spelling is almost entirely phonetic.",
    ),
    "turkish": (
        "Turkish switched from the Arabic script to the Latin alphabet in 1928.",
        "Turkish builds words by adding suffixes one after another.",
        "Turkish has no grammatical gender.",
    ),
})


class FactResponder:

    def __init__(self, validator: InputValidator, rng: Optional[random.Random] = None):
        self.validator = validator
        self.rng = rng or random.Random()

    def fact_for(self, language: Optional[str]) -> str:
        profile = self.validator.resolve_language(language)
        return self.rng.choice(FACTS[profile.name])
