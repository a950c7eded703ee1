"""Tests for the translation cache."""

import pytest

from gettranslated.i18n.cache import TranslationCache
from gettranslated.storage.local import InMemoryKeyValueStore


@pytest.fixture
def cache():
    return TranslationCache(InMemoryKeyValueStore())


class TestTranslationCache:
    def test_put_then_get(self, cache):
        cache.put("es", "Hello World", "Hola Mundo")
        assert cache.get("es", "Hello World") == "Hola Mundo"

    def test_miss_is_none(self, cache):
        assert cache.get("es", "Never cached") is None

    def test_remove(self, cache):
        cache.put("es", "Hello World", "Hola Mundo")
        cache.remove("es", "Hello World")
        
        assert cache.get("es", "Hello World") is None

    def test_last_write_wins(self, cache):
        cache.put("es", "Hello", "Hola")
        cache.put("es", "Hello", "¡Hola!")
        
        assert cache.get("es", "Hello") == "¡Hola!"

    def test_languages_are_separate(self, cache):
        cache.put("es", "Hello", "Hola")
        cache.put("fr", "Hello", "Bonjour")
        
        assert cache.get("es", "Hello") == "Hola"
        assert cache.get("fr", "Hello") == "Bonjour"
        assert cache.get("de", "Hello") is None

    def test_make_key_is_deterministic(self):
        assert TranslationCache.make_key("es", "Hello") == TranslationCache.make_key("es", "Hello")
        assert TranslationCache.make_key("es", "Hello") != TranslationCache.make_key("fr", "Hello")
        assert TranslationCache.make_key("es", "Hello") != TranslationCache.make_key("es", "Bye")

    def test_stored_under_shared_key(self, cache):
        cache.put("en", "Hello World", "x")
        assert cache.store.get("ai.gettranslated.sdk_trans_en-862545276_translation") == "x"
