from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional
import random

from boto3.dynamodb.conditions import Attr

from langlearn.models import TranslationRecord
from . import aws


class HistoryStore(ABC):
    """Append-only translation history, queried by (language, user)."""

    @abstractmethod
    async def append(self, record: TranslationRecord) -> None:
        ...

    @abstractmethod
    async def query(self, language: str, user_id: str) -> List[TranslationRecord]:
        ...

    async def random_entry(self, language: str, user_id: str,
                           rng: Optional[random.Random] = None) -> Optional[TranslationRecord]:
        records = await self.query(language, user_id)
        if not records:
            return None
        return records[(rng or random).randrange(len(records))]


class InMemoryHistoryStore(HistoryStore):
    """List-backed history for local runs and tests."""

    def __init__(self) -> None:
        self._records: List[TranslationRecord] = []

    async def append(self, record: TranslationRecord) -> None:
        self._records.append(record)

    async def query(self, language: str, user_id: str) -> List[TranslationRecord]:
        return [r for r in self._records if r.language == language and r.user_id == user_id]

    def __len__(self) -> int:
        return len(self._records)


class DynamoHistoryStore(HistoryStore):
    """History kept in a DynamoDB table keyed by ``phrase_id``."""

    def __init__(self, table_name: str, dynamodb=None, region_name: str | None = None):
        self.table_name = table_name
        self._table = (dynamodb or aws.resource("dynamodb", region_name)).Table(table_name)

    async def append(self, record: TranslationRecord) -> None:
        await aws.call(self._table.put_item, Item=record.to_item())

    async def query(self, language: str, user_id: str) -> List[TranslationRecord]:
        condition = Attr("language").eq(language) & Attr("user").eq(user_id)
        kwargs = {"FilterExpression": condition}
        records: List[TranslationRecord] = []
        while True:
            page = await aws.call(self._table.scan, **kwargs)
            records.extend(TranslationRecord.from_item(item) for item in page.get("Items", []))
            last_key = page.get("LastEvaluatedKey")
            if not last_key:
                return records
            kwargs["ExclusiveStartKey"] = last_key
