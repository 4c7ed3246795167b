"""Quiz users on phrases they translated before."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import random

from langlearn.errors import NoHistoryError, NoPendingQuestionError
from langlearn.models import SessionContext, TranslationRecord
from langlearn.utils.logger import ServiceLogger
from langlearn.utils.metrics import MetricsCollector
from langlearn.utils.validation import InputValidator
from .audio import AudioPublisher
from .db import HistoryStore


@dataclass(frozen=True)
class QuizQuestion:
    record: TranslationRecord
    language: str
    audio_url: str


@dataclass(frozen=True)
class QuizVerdict:
    correct: bool
    expected: str


class QuizEngine:
    """Two-turn quiz: ``ask`` poses a question, ``check`` grades the answer."""

    def __init__(self, validator: InputValidator, history: HistoryStore, audio: AudioPublisher,
                 logger: ServiceLogger, metrics: MetricsCollector,
                 rng: Optional[random.Random] = None):
        self.validator = validator
        self.history = history
        self.audio = audio
        self.logger = logger
        self.metrics = metrics
        self.rng = rng or random.Random()

    async def pick_record(self, language: str, user_id: str) -> TranslationRecord:
        try:
            record = await self.history.random_entry(language, user_id, self.rng)
        except Exception as exc:
            self.logger.exception("History query failed", exc, language=language)
            raise NoHistoryError() from exc
        if record is None:
            raise NoHistoryError(
                f"You haven't translated anything into {language} yet. "
                "Ask me to translate a phrase first."
            )
        return record

    async def ask(self, language: Optional[str], user_id: str, session: SessionContext,
                  request_id: str = "") -> QuizQuestion:
        profile = self.validator.resolve_language(language)
        record = await self.pick_record(profile.name, user_id)
        audio_url = await self.audio.publish(record.translated_phrase, profile.voice, request_id)
        # Only a question that was actually posed becomes pending
        session.pending_record = record

        self.metrics.increment("quiz_questions_total", tags={"language": profile.name})
        self.logger.info(f"Quiz question posed from record {record.id}", record=record.id)
        return QuizQuestion(record=record, language=profile.name, audio_url=audio_url)

    def check(self, answer: str, session: SessionContext) -> QuizVerdict:
        record = session.pending_record
        if record is None:
            raise NoPendingQuestionError()
        session.pending_record = None

        correct = answer == record.source_phrase
        self.metrics.increment("quiz_correct" if correct else "quiz_incorrect")
        self.logger.info(f"Quiz answered {'correctly' if correct else 'incorrectly'}", record=record.id)
        return QuizVerdict(correct=correct, expected=record.source_phrase)
