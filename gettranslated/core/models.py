"""
Wire models for server responses.

Responses are parsed leniently: unknown fields are ignored and optional
fields may be absent. A field that is present with the wrong shape raises
``ParseError``.
"""

from __future__ import annotations

from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, field_validator

from gettranslated.core.errors import ParseError
from gettranslated.i18n.languages import normalize_language_codes


class InitResponse(BaseModel):
    """Response of ``/client/init``."""
    
    model_config = ConfigDict(extra="ignore")
    
    project: str | None = None
    base_language: str | None = None
    languages: list[str] | None = None
    language_override: str | None = None
    
    @field_validator("languages", mode="before")
    @classmethod
    def _normalize_languages(cls, value: Any) -> list[str] | None:
        # Either ["en", "es"] or [{"code": "en", "name": "English"}, ...]
        if value is None:
            return None
        return normalize_language_codes(value)


class TranslationResponse(BaseModel):
    """Response of ``/client/string``."""
    
    model_config = ConfigDict(extra="ignore")
    
    translation: str | None = None


class SyncedTranslation(BaseModel):
    """One entry of a sync response."""
    
    model_config = ConfigDict(extra="ignore")
    
    lang: str
    string: str
    translation: str


class SyncResponse(BaseModel):
    """Response of ``/client/sync``."""
    
    model_config = ConfigDict(extra="ignore")
    
    translations: list[Any] | None = None
    
    def entries(self) -> list[SyncedTranslation]:
        """Well-formed entries; malformed ones are skipped."""
        result: list[SyncedTranslation] = []
        for raw in self.translations or []:
            try:
                result.append(SyncedTranslation.model_validate(raw))
            except pydantic.ValidationError:
                continue
        return result


def parse_response(model: type[pydantic.BaseModel], data: dict[str, Any]):
    """Validate a response body, converting schema errors to ``ParseError``."""
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise ParseError(f"Invalid {model.__name__}: {e.errors()[0]['msg']}") from e
