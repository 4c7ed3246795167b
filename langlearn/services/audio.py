"""Speech synthesis followed by upload, shared by translations and quizzes."""
from __future__ import annotations
import uuid

from langlearn.errors import AudioStorageError, SynthesisError
from langlearn.utils.logger import ServiceLogger
from langlearn.utils.metrics import MetricsCollector
from .stages import stage
from .storage import S3AudioStore
from .voice import Audio, PollyVoiceService

EXTENSIONS = {"mp3": "mp3", "ogg_vorbis": "ogg", "pcm": "pcm"}


class AudioPublisher:

    def __init__(self, speech: PollyVoiceService, store: S3AudioStore,
                 logger: ServiceLogger, metrics: MetricsCollector, key_prefix: str = "audio/"):
        self.speech = speech
        self.store = store
        self.logger = logger
        self.metrics = metrics
        self.key_prefix = key_prefix

    def key_for(self, request_id: str, audio: Audio) -> str:
        # One object per request, so concurrent turns never share a key
        name = request_id or uuid.uuid4().hex
        return f"{self.key_prefix}{name}.{EXTENSIONS.get(audio.format, audio.format)}"

    async def synthesize(self, text: str, voice_id: str) -> Audio:
        with stage("synthesize", SynthesisError, self.logger, self.metrics, voice=voice_id):
            audio = await self.speech.synthesize(text, voice_id)
            if not audio.content:
                self.logger.error("Speech service returned no audio", voice=voice_id)
                raise SynthesisError()
        self.metrics.gauge("last_audio_bytes", len(audio.content))
        self.logger.info(f"Synthesized {len(audio.content)} bytes with voice {voice_id}", voice=voice_id)
        return audio

    async def store_audio(self, request_id: str, audio: Audio) -> str:
        key = self.key_for(request_id, audio)
        with stage("store_audio", AudioStorageError, self.logger, self.metrics, key=key):
            location = await self.store.upload(key, audio)
            if not location:
                self.logger.error("Object store returned no location", key=key)
                raise AudioStorageError()
        self.logger.info(f"Stored audio at {key}", key=key)
        return location

    async def publish(self, text: str, voice_id: str, request_id: str) -> str:
        audio = await self.synthesize(text, voice_id)
        return await self.store_audio(request_id, audio)
