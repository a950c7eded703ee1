"""
Language resolution and translation caching.

Usage:
    from gettranslated.i18n import resolve_language, TranslationCache
    
    language = resolve_language(
        server_override=None,
        saved_preference="fr",
        supported_languages={"en", "fr"},
        base_language="en",
        device_language="de",
    )  # -> "fr"
"""

from gettranslated.i18n.cache import TranslationCache
from gettranslated.i18n.languages import (
    DEFAULT_LANGUAGE,
    base_subtag,
    detect_device_language,
    find_best_language_match,
    normalize_language_codes,
    resolve_language,
)

__all__ = [
    "TranslationCache",
    "DEFAULT_LANGUAGE",
    "base_subtag",
    "detect_device_language",
    "find_best_language_match",
    "normalize_language_codes",
    "resolve_language",
]
