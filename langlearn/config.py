"""Static language tables and service port assignments."""
from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class LanguageProfile:
    name: str
    code: str
    voice: str


SOURCE_LANGUAGE = "english"
SOURCE_LANGUAGE_CODE = "en"

_PROFILES = (
    LanguageProfile("chinese", "zh", "Zhiyu"),
    LanguageProfile("french", "fr", "Mathieu"),
    LanguageProfile("german", "de", "Hans"),
    LanguageProfile("italian", "it", "Giorgio"),
    LanguageProfile("japanese", "ja", "Takumi"),
    LanguageProfile("portuguese", "pt", "Ricardo"),
    LanguageProfile("russian", "ru", "Maxim"),
    LanguageProfile("spanish", "es", "Enrique"),
    LanguageProfile("turkish", "tr", "Filiz"),
)

LANGUAGES: Mapping[str, LanguageProfile] = MappingProxyType({p.name: p for p in _PROFILES})
VOICES_BY_CODE: Mapping[str, str] = MappingProxyType({p.code: p.voice for p in _PROFILES})
SUPPORTED_LANGUAGES = frozenset(LANGUAGES)

SERVICE_PORTS = MappingProxyType({
    "skill": 8020,
})


def code_for(language: str) -> Optional[str]:
    profile = LANGUAGES.get(language)
    return profile.code if profile else None


def voice_for_code(code: str) -> Optional[str]:
    return VOICES_BY_CODE.get(code)


def get_service_url(service_name: str) -> str:
    """Get the full URL for a service."""
    port = SERVICE_PORTS.get(service_name)
    if not port:
        raise ValueError(f"Unknown service: {service_name}")
    return f"http://localhost:{port}"
