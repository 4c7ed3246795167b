"""Tests for the AWS-backed adapters, using botocore's Stubber instead of the network."""
import io

import pytest
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError
from botocore.response import StreamingBody
from botocore.stub import ANY, Stubber

from langlearn.models import TranslationRecord
from langlearn.services import aws
from langlearn.services.db import DynamoHistoryStore
from langlearn.services.storage import S3AudioStore
from langlearn.services.translate import AmazonTranslateService
from langlearn.services.voice import Audio, PollyVoiceService

pytestmark = pytest.mark.asyncio

REGION = "us-east-1"


@pytest.fixture(autouse=True)
def fake_credentials(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)


async def test_translate_text():
    client = aws.client("translate", REGION)
    with Stubber(client) as stubber:
        stubber.add_response(
            "translate_text",
            {"TranslatedText": "Bonjour", "SourceLanguageCode": "en", "TargetLanguageCode": "fr"},
            {"Text": "Hello there", "SourceLanguageCode": "en", "TargetLanguageCode": "fr"},
        )
        translation = await AmazonTranslateService(client).translate("Hello there", "en", "fr")

    assert translation.text == "Bonjour"
    assert translation.target_code == "fr"


async def test_translate_error_propagates():
    client = aws.client("translate", REGION)
    with Stubber(client) as stubber:
        stubber.add_client_error("translate_text", service_error_code="TooManyRequestsException")
        with pytest.raises(ClientError) as exc_info:
            await AmazonTranslateService(client).translate("hello", "en", "fr")

    assert exc_info.value.response["Error"]["Code"] == "TooManyRequestsException"


async def test_polly_reads_audio_stream():
    client = aws.client("polly", REGION)
    payload = b"ID3-audio"
    with Stubber(client) as stubber:
        stubber.add_response(
            "synthesize_speech",
            {"AudioStream": StreamingBody(io.BytesIO(payload), len(payload)), "ContentType": "audio/mpeg"},
            {"Text": "Bonjour", "OutputFormat": "mp3", "VoiceId": "Mathieu"},
        )
        audio = await PollyVoiceService(client).synthesize("Bonjour", "Mathieu")

    assert audio == Audio(content=payload, format="mp3")


async def test_s3_upload_returns_presigned_location():
    client = aws.client("s3", REGION)
    with Stubber(client) as stubber:
        stubber.add_response(
            "put_object",
            {},
            {"Bucket": "audio-bucket", "Key": "audio/req-1.mp3", "Body": ANY, "ContentType": "audio/mpeg"},
        )
        location = await S3AudioStore("audio-bucket", client).upload("audio/req-1.mp3", Audio(b"ID3"))

    assert "audio-bucket" in location
    assert "audio/req-1.mp3" in location
    assert "Signature" in location


class FakeTable:
    def __init__(self, pages=()):
        self.pages = list(pages)
        self.puts = []
        self.scans = []

    def put_item(self, **kwargs):
        self.puts.append(kwargs)
        return {}

    def scan(self, **kwargs):
        self.scans.append(kwargs)
        return self.pages.pop(0)


class FakeDynamoResource:
    def __init__(self, table):
        self.table = table
        self.names = []

    def Table(self, name):
        self.names.append(name)
        return self.table


def _item(phrase_id, phrase, user="user-1"):
    return {"phrase_id": phrase_id, "language": "french", "phrase": phrase,
            "translation": phrase.upper(), "user": user}


async def test_dynamo_append_writes_item_layout():
    table = FakeTable()
    resource = FakeDynamoResource(table)
    store = DynamoHistoryStore("quiz-table", dynamodb=resource)
    record = TranslationRecord(user_id="user-1", language="french", source_phrase="hello",
                               translated_phrase="bonjour", id="phrase-1")

    await store.append(record)

    assert resource.names == ["quiz-table"]
    assert table.puts == [{"Item": {
        "phrase_id": "phrase-1",
        "language": "french",
        "phrase": "hello",
        "translation": "bonjour",
        "user": "user-1",
    }}]


async def test_dynamo_query_filters_and_follows_pagination():
    table = FakeTable(pages=[
        {"Items": [_item("p1", "hello")], "LastEvaluatedKey": {"phrase_id": "p1"}},
        {"Items": [_item("p2", "good morning")]},
    ])
    store = DynamoHistoryStore("quiz-table", dynamodb=FakeDynamoResource(table))

    records = await store.query("french", "user-1")

    assert [r.id for r in records] == ["p1", "p2"]
    assert records[1].source_phrase == "good morning"
    assert records[1].translated_phrase == "GOOD MORNING"
    assert "ExclusiveStartKey" not in table.scans[0]
    assert table.scans[1]["ExclusiveStartKey"] == {"phrase_id": "p1"}
    expression = table.scans[0]["FilterExpression"]
    assert expression == Attr("language").eq("french") & Attr("user").eq("user-1")
