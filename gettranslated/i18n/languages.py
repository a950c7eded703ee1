"""
Language detection and resolution.

Decides which language a user sees, combining the server override, the
user's saved preference and the device locale.
"""

from __future__ import annotations

import locale
import logging
import os
import re
from typing import Any, Iterable

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"

_SUBTAG_SEPARATORS = re.compile(r"[-_]")


# =============================================================================
# Utilities
# =============================================================================


def base_subtag(code: str) -> str:
    """Language part of a locale code: "en-US" -> "en", "pt_BR" -> "pt"."""
    return _SUBTAG_SEPARATORS.split(code, maxsplit=1)[0]


def normalize_language_codes(raw: Any) -> list[str]:
    """
    Normalize the ``languages`` field of an init response.
    
    Accepts a list of codes or a list of ``{"code": ..., "name": ...}``
    objects. Objects without a string code are skipped.
    """
    if not isinstance(raw, list):
        raise ValueError("languages must be a list")
    
    codes: list[str] = []
    for item in raw:
        if isinstance(item, str):
            codes.append(item)
        elif isinstance(item, dict) and isinstance(item.get("code"), str):
            codes.append(item["code"])
    return codes


# =============================================================================
# Device language
# =============================================================================


def detect_device_language() -> str:
    """
    Language of the current process locale as an ISO 639-1 code.
    
    Checks the POSIX locale variables first, then ``locale.getlocale()``.
    """
    for variable in ("LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(variable, "")
        # LANGUAGE may hold a priority list like "de:en"
        value = value.split(":", 1)[0].split(".", 1)[0]
        if value and value not in ("C", "POSIX"):
            language = base_subtag(value).lower()
            logger.debug(f"Using {variable}: {language}")
            return language
    
    try:
        code = locale.getlocale()[0]
    except ValueError:
        code = None
    if code and code not in ("C", "POSIX"):
        language = base_subtag(code).lower()
        logger.debug(f"Using locale.getlocale(): {language}")
        return language
    
    logger.warning(f"All language detection methods failed, using fallback: {DEFAULT_LANGUAGE}")
    return DEFAULT_LANGUAGE


# =============================================================================
# Resolution
# =============================================================================


def find_best_language_match(
    available: Iterable[str],
    device_language: str,
    fallback: str = DEFAULT_LANGUAGE,
) -> str:
    """
    Best supported language for the device language.
    
    Tries, in order: exact match, base subtag match, any supported language
    starting with the base subtag, the fallback if supported, and finally
    the first supported language (sorted). With nothing available the
    fallback is returned.
    """
    supported = sorted(set(available))
    if not supported:
        return fallback
    
    if device_language in supported:
        logger.debug(f"Exact language match found: {device_language}")
        return device_language
    
    base = base_subtag(device_language)
    if base in supported:
        logger.debug(f"Base language match found: {base}")
        return base
    
    if base:
        for candidate in supported:
            if candidate.startswith(base):
                logger.debug(f"Partial language match found: {candidate}")
                return candidate
    
    if fallback in supported:
        logger.debug(f"Using fallback language: {fallback}")
        return fallback
    
    logger.debug(f"Using first supported language: {supported[0]}")
    return supported[0]


def resolve_language(
    server_override: str | None,
    saved_preference: str | None,
    supported_languages: Iterable[str],
    base_language: str,
    device_language: str,
) -> str:
    """
    Pick the active language. First applicable rule wins:
    
    1. Server override, verbatim.
    2. Saved user preference, if supported.
    3. Best match of the device language, falling back to the base language.
    """
    if server_override:
        logger.info(f"Using server language override: {server_override}")
        return server_override
    
    supported = set(supported_languages)
    if saved_preference and saved_preference in supported:
        logger.info(f"Using saved language preference: {saved_preference}")
        return saved_preference
    
    fallback = base_language or DEFAULT_LANGUAGE
    language = find_best_language_match(supported, device_language, fallback)
    logger.info(f"Using default language: {language}")
    return language
