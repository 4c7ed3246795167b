"""Fixtures for the skill service tests: recording fakes for every remote service."""
import random
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from langlearn.services.audio import AudioPublisher
from langlearn.services.db import InMemoryHistoryStore
from langlearn.services.facts import FactResponder
from langlearn.services.pipeline import TranslationPipeline
from langlearn.services.quiz import QuizEngine
from langlearn.services.skill import LanguageSkill
from langlearn.services.translate import Translation
from langlearn.services.voice import Audio
from langlearn.utils.logger import ServiceLogger
from langlearn.utils.metrics import MetricsCollector
from langlearn.utils.validation import InputValidator

VOCABULARY = {"hello", "there", "good", "morning", "thank", "you", "the", "cat", "is", "black", "english", "dutch"}


class FakeTranslator:
    def __init__(self):
        self.calls = []
        self.replies = {}
        self.error = None

    async def translate(self, text, source_code, target_code):
        self.calls.append((source_code, target_code, text))
        if self.error:
            raise self.error
        return self.replies.get((text, target_code), Translation(f"<{target_code}> {text}", target_code))


class FakeSpeech:
    def __init__(self):
        self.calls = []
        self.error = None
        self.content = b"ID3-fake-mp3"

    async def synthesize(self, text, voice_id):
        self.calls.append((text, voice_id))
        if self.error:
            raise self.error
        return Audio(content=self.content, format="mp3")


class FakeAudioStore:
    def __init__(self):
        self.uploads = []
        self.error = None

    async def upload(self, key, audio):
        self.uploads.append((key, audio))
        if self.error:
            raise self.error
        return f"https://bucket.s3.amazonaws.com/{key}?X-Amz-Expires=3600&X-Amz-Signature=abc"


class FakeHistory(InMemoryHistoryStore):
    def __init__(self):
        super().__init__()
        self.append_error = None
        self.query_error = None
        self.queries = []

    async def append(self, record):
        if self.append_error:
            raise self.append_error
        await super().append(record)

    async def query(self, language, user_id):
        self.queries.append((language, user_id))
        if self.query_error:
            raise self.query_error
        return await super().query(language, user_id)


@pytest.fixture
def logger(tmp_path):
    return ServiceLogger("skill-test", log_dir=str(tmp_path))


@pytest.fixture
def metrics():
    return MetricsCollector("skill-test")


@pytest.fixture
def validator():
    return InputValidator(VOCABULARY)


@pytest.fixture
def translator():
    return FakeTranslator()


@pytest.fixture
def speech():
    return FakeSpeech()


@pytest.fixture
def audio_store():
    return FakeAudioStore()


@pytest.fixture
def history():
    return FakeHistory()


@pytest.fixture
def audio(speech, audio_store, logger, metrics):
    return AudioPublisher(speech, audio_store, logger, metrics, key_prefix="audio/")


@pytest.fixture
def pipeline(validator, translator, history, audio, logger, metrics):
    return TranslationPipeline(validator, translator, history, audio, logger, metrics)


@pytest.fixture
def quiz(validator, history, audio, logger, metrics):
    return QuizEngine(validator, history, audio, logger, metrics, rng=random.Random(7))


@pytest.fixture
def make_skill(pipeline, quiz, validator, logger, metrics):
    def _make(skill_id=None):
        facts = FactResponder(validator, rng=random.Random(3))
        return LanguageSkill(pipeline, quiz, facts, logger, metrics, skill_id=skill_id)
    return _make


@pytest.fixture
def skill(make_skill):
    return make_skill()


@pytest.fixture
def make_envelope():
    """Build a platform request envelope for one turn."""
    def _make(intent=None, slots=None, attributes=None, request_type="IntentRequest",
              user_id="amzn1.ask.account.user-1", request_id="req-1",
              application_id="amzn1.ask.skill.test"):
        request = {"type": request_type, "requestId": request_id}
        if intent:
            request["intent"] = {
                "name": intent,
                "slots": {
                    name: ({"name": name, "value": value} if value is not None else {"name": name})
                    for name, value in (slots or {}).items()
                },
            }
        return {
            "version": "1.0",
            "session": {
                "sessionId": "session-1",
                "new": attributes is None,
                "attributes": attributes or {},
                "user": {"userId": user_id},
                "application": {"applicationId": application_id},
            },
            "context": {
                "System": {
                    "user": {"userId": user_id},
                    "application": {"applicationId": application_id},
                },
            },
            "request": request,
        }
    return _make
