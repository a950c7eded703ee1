"""
Storage key naming.

Keys follow ``{PREFIX}_{CATEGORY}_{IDENTIFIER}_{SUFFIX}``. The scheme,
including the translation key hash, is shared with the other GetTranslated
SDKs and must not change.
"""

from __future__ import annotations

from gettranslated.storage.base import KeyValueStore

PREFIX = "ai.gettranslated.sdk"


class Category:
    """Key categories."""
    
    USER = "user"
    LANGUAGE = "lang"
    TRANSLATION = "trans"
    SYNC = "sync"
    CONFIG = "config"


GLOBAL = "global"


# =============================================================================
# Key generation
# =============================================================================


def string_hash(text: str) -> int:
    """
    32-bit signed ``h = h*31 + byte`` over the UTF-8 bytes of ``text``.
    
    Equals Java's ``String.hashCode()`` for ASCII text.
    """
    h = 0
    for byte in text.encode("utf-8"):
        h = (h * 31 + byte) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


def generate_key(category: str, identifier: str, suffix: str) -> str:
    return f"{PREFIX}_{category}_{identifier}_{suffix}"


def generate_user_key(user_id: str, suffix: str) -> str:
    return generate_key(Category.USER, user_id, suffix)


def generate_language_key(language: str, suffix: str) -> str:
    return generate_key(Category.LANGUAGE, language, suffix)


def generate_translation_key(language: str, text: str) -> str:
    """``{PREFIX}_trans_{language}{hash}_translation``"""
    return generate_key(Category.TRANSLATION, f"{language}{string_hash(text)}", "translation")


# =============================================================================
# Typed accessors
# =============================================================================


class SdkState:
    """Typed access to the values the SDK persists outside the translation cache."""
    
    def __init__(self, store: KeyValueStore):
        self.store = store
    
    # User language preference
    
    def get_user_language_override(self, user_id: str) -> str | None:
        return self.store.get_str(generate_user_key(user_id, "language_override"))
    
    def set_user_language_override(self, user_id: str, language: str) -> None:
        self.store.set(generate_user_key(user_id, "language_override"), language)
    
    def remove_user_language_override(self, user_id: str) -> None:
        self.store.delete(generate_user_key(user_id, "language_override"))
    
    # Server language override
    
    def get_server_language_override(self, user_id: str) -> str | None:
        return self.store.get_str(generate_user_key(user_id, "server_override"))
    
    def set_server_language_override(self, user_id: str, language: str) -> None:
        self.store.set(generate_user_key(user_id, "server_override"), language)
    
    def remove_server_language_override(self, user_id: str) -> None:
        self.store.delete(generate_user_key(user_id, "server_override"))
    
    # Sync timestamps (milliseconds since epoch, per language)
    
    def get_last_sync(self, language: str) -> int:
        return self.store.get_int(generate_language_key(language, "last_sync"))
    
    def set_last_sync(self, language: str, timestamp: int) -> None:
        self.store.set(generate_language_key(language, "last_sync"), int(timestamp))
    
    # Anonymous user id
    
    def get_stored_user_id(self) -> str | None:
        return self.store.get_str(generate_key(Category.CONFIG, GLOBAL, "user_id"))
    
    def store_user_id(self, user_id: str) -> None:
        self.store.set(generate_key(Category.CONFIG, GLOBAL, "user_id"), user_id)
    
    def remove_stored_user_id(self) -> None:
        self.store.delete(generate_key(Category.CONFIG, GLOBAL, "user_id"))
    
    # App name
    
    def get_app_name(self) -> str | None:
        return self.store.get_str(generate_key(Category.CONFIG, GLOBAL, "app_name"))
    
    def store_app_name(self, app_name: str) -> None:
        self.store.set(generate_key(Category.CONFIG, GLOBAL, "app_name"), app_name)
