from __future__ import annotations
from contextlib import closing
from dataclasses import dataclass

from . import aws


@dataclass
class Audio:
    content: bytes
    format: str = "mp3"


class PollyVoiceService:
    """Text-to-speech through Amazon Polly."""

    def __init__(self, polly_client=None, region_name: str | None = None, output_format: str = "mp3"):
        self._client = polly_client or aws.client("polly", region_name)
        self.output_format = output_format

    async def synthesize(self, text: str, voice_id: str) -> Audio:
        result = await aws.call(
            self._client.synthesize_speech,
            Text=text,
            OutputFormat=self.output_format,
            VoiceId=voice_id,
        )
        stream = result.get("AudioStream")
        if stream is None:
            return Audio(content=b"", format=self.output_format)
        with closing(stream):
            content = await aws.call(stream.read)
        return Audio(content=content, format=self.output_format)
