"""Translate a phrase, remember it, and speak the result back."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from langlearn.config import SOURCE_LANGUAGE_CODE, LanguageProfile, voice_for_code
from langlearn.errors import PersistenceError, TranslationError, ValidationError
from langlearn.models import TranslationRecord
from langlearn.utils.logger import ServiceLogger
from langlearn.utils.metrics import MetricsCollector
from langlearn.utils.validation import InputValidator
from .audio import AudioPublisher
from .db import HistoryStore
from .stages import stage
from .translate import AmazonTranslateService, Translation


@dataclass(frozen=True)
class TranslationResult:
    record: TranslationRecord
    audio_url: str


class TranslationPipeline:
    """validate -> translate -> persist -> synthesize -> store audio.

    Every stage runs once and only after the previous one succeeded; the first
    failure raises its SkillError and nothing after it runs.
    """

    def __init__(self, validator: InputValidator, translator: AmazonTranslateService,
                 history: HistoryStore, audio: AudioPublisher,
                 logger: ServiceLogger, metrics: MetricsCollector):
        self.validator = validator
        self.translator = translator
        self.history = history
        self.audio = audio
        self.logger = logger
        self.metrics = metrics

    def validate(self, phrase: Optional[str], language: Optional[str]) -> LanguageProfile:
        if phrase is None:
            raise ValidationError("I didn't catch the phrase you want translated.")
        if not self.validator.is_valid(phrase):
            raise ValidationError("Your sentence contains some words not found in international English.")
        return self.validator.resolve_language(language)

    async def translate(self, phrase: str, profile: LanguageProfile) -> Translation:
        with stage("translate", TranslationError, self.logger, self.metrics, target=profile.code):
            translation = await self.translator.translate(phrase, SOURCE_LANGUAGE_CODE, profile.code)
        self.logger.info(f"Translated into {profile.name}: '{translation.text[:50]}'",
                         target=translation.target_code)
        return translation

    async def persist(self, user_id: str, phrase: str, profile: LanguageProfile,
                      translation: Translation) -> TranslationRecord:
        record = TranslationRecord(
            user_id=user_id,
            language=profile.name,
            source_phrase=phrase,
            translated_phrase=translation.text,
        )
        with stage("persist", PersistenceError, self.logger, self.metrics, record=record.id):
            await self.history.append(record)
        return record

    async def run(self, phrase: Optional[str], language: Optional[str], user_id: str,
                  request_id: str = "") -> TranslationResult:
        try:
            profile = self.validate(phrase, language)
        except ValidationError as e:
            self.metrics.increment("pipeline_failures_validate")
            self.logger.info(f"Rejected translation request: {e.message}", phrase=phrase, language=language)
            raise
        self.metrics.increment("translations_total", tags={"language": profile.name})

        translation = await self.translate(phrase, profile)
        record = await self.persist(user_id, phrase, profile, translation)
        voice = voice_for_code(translation.target_code) or profile.voice
        audio_url = await self.audio.publish(translation.text, voice, request_id)
        return TranslationResult(record=record, audio_url=audio_url)
