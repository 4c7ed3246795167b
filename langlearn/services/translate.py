from __future__ import annotations
from dataclasses import dataclass

from . import aws


@dataclass(frozen=True)
class Translation:
    text: str
    target_code: str


class AmazonTranslateService:
    """Machine translation through Amazon Translate."""

    def __init__(self, translate_client=None, region_name: str | None = None):
        self._client = translate_client or aws.client("translate", region_name)

    async def translate(self, text: str, source_code: str, target_code: str) -> Translation:
        result = await aws.call(
            self._client.translate_text,
            Text=text,
            SourceLanguageCode=source_code,
            TargetLanguageCode=target_code,
        )
        return Translation(
            text=result["TranslatedText"],
            target_code=result.get("TargetLanguageCode", target_code),
        )
