from __future__ import annotations

from . import aws
from .voice import Audio

CONTENT_TYPES = {
    "mp3": "audio/mpeg",
    "ogg_vorbis": "audio/ogg",
    "pcm": "audio/pcm",
}


class S3AudioStore:
    """Uploads synthesized audio to a bucket and hands back a presigned URL."""

    def __init__(self, bucket: str, s3_client=None, region_name: str | None = None,
                 url_expires: int = 3600):
        self.bucket = bucket
        self.url_expires = url_expires
        self._client = s3_client or aws.client("s3", region_name)

    async def upload(self, key: str, audio: Audio) -> str:
        await aws.call(
            self._client.put_object,
            Bucket=self.bucket,
            Key=key,
            Body=audio.content,
            ContentType=CONTENT_TYPES.get(audio.format, "application/octet-stream"),
        )
        return await aws.call(
            self._client.generate_presigned_url,
            "get_object",
            Params={"Bucket": self.bucket, "Key": key},
            ExpiresIn=self.url_expires,
        )
