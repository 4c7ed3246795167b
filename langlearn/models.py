from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import uuid


@dataclass(frozen=True)
class TranslationRecord:
    user_id: str
    language: str
    source_phrase: str
    translated_phrase: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_item(self) -> Dict[str, str]:
        """Attribute layout used by the history table."""
        return {
            "phrase_id": self.id,
            "language": self.language,
            "phrase": self.source_phrase,
            "translation": self.translated_phrase,
            "user": self.user_id,
        }

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "TranslationRecord":
        return cls(
            id=item["phrase_id"],
            user_id=item["user"],
            language=item["language"],
            source_phrase=item["phrase"],
            translated_phrase=item["translation"],
        )

    def to_attributes(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "language": self.language,
            "sourcePhrase": self.source_phrase,
            "translatedPhrase": self.translated_phrase,
        }

    @classmethod
    def from_attributes(cls, attrs: Dict[str, Any]) -> "TranslationRecord":
        return cls(
            id=attrs["id"],
            user_id=attrs["userId"],
            language=attrs["language"],
            source_phrase=attrs["sourcePhrase"],
            translated_phrase=attrs["translatedPhrase"],
        )


@dataclass
class SessionContext:
    """Per-conversation state carried in the platform's session attributes."""

    pending_record: Optional[TranslationRecord] = None

    @classmethod
    def from_attributes(cls, attrs: Optional[Dict[str, Any]]) -> "SessionContext":
        pending = (attrs or {}).get("pendingRecord")
        if not pending:
            return cls()
        return cls(pending_record=TranslationRecord.from_attributes(pending))

    def to_attributes(self) -> Dict[str, Any]:
        if self.pending_record is None:
            return {}
        return {"pendingRecord": self.pending_record.to_attributes()}
