"""
Translation cache.

Maps (language, source text) to a translated string in the key-value
store. Entries never expire; they are replaced by newer values from a
fetch or a sync, or removed explicitly.
"""

from __future__ import annotations

from gettranslated.storage.base import KeyValueStore
from gettranslated.storage.keys import generate_translation_key


class TranslationCache:
    """Hash-keyed translation cache backed by a ``KeyValueStore``."""
    
    def __init__(self, store: KeyValueStore):
        self.store = store
    
    @staticmethod
    def make_key(language: str, text: str) -> str:
        """Storage key for a translation of ``text`` into ``language``."""
        return generate_translation_key(language, text)
    
    def get(self, language: str, text: str) -> str | None:
        """Get cached translation."""
        return self.store.get_str(self.make_key(language, text))
    
    def put(self, language: str, text: str, translation: str) -> None:
        """Cache a translation. Last write wins."""
        self.store.set(self.make_key(language, text), translation)
    
    def remove(self, language: str, text: str) -> None:
        self.store.delete(self.make_key(language, text))
