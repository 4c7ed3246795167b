"""SSML fragments for spoken output."""
from xml.sax.saxutils import escape


def audio_tag(url: str) -> str:
    # presigned query strings carry '&'
    src = escape(url, {"'": "&apos;"})
    return f"<audio src='{src}'/>"


def text(value: str) -> str:
    return escape(value)
