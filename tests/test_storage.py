"""
Tests for storage keys, typed accessors and the key-value stores.

Key names are shared with the other GetTranslated SDKs, so the exact
strings matter.
"""

import json

import pytest

from gettranslated.storage.keys import (
    SdkState,
    generate_key,
    generate_language_key,
    generate_translation_key,
    generate_user_key,
    string_hash,
)
from gettranslated.storage.local import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    create_store,
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def state():
    return SdkState(InMemoryKeyValueStore())


# =============================================================================
# Key Generation Tests
# =============================================================================


class TestKeyGeneration:
    def test_generate_key(self):
        result = generate_key("user", "test123", "language_override")
        assert result == "ai.gettranslated.sdk_user_test123_language_override"

    def test_user_key(self):
        assert generate_user_key("user123", "server_override") == (
            "ai.gettranslated.sdk_user_user123_server_override"
        )

    def test_language_key(self):
        assert generate_language_key("es", "last_sync") == "ai.gettranslated.sdk_lang_es_last_sync"

    def test_translation_key_matches_other_sdks(self):
        # Java "Hello World".hashCode() == -862545276
        assert generate_translation_key("en", "Hello World") == (
            "ai.gettranslated.sdk_trans_en-862545276_translation"
        )

    def test_translation_key_uniqueness(self):
        key1 = generate_translation_key("en", "Hello World")
        key2 = generate_translation_key("es", "Hello World")
        key3 = generate_translation_key("en", "Hola Mundo")
        
        assert len({key1, key2, key3}) == 3


class TestStringHash:
    def test_known_values(self):
        assert string_hash("") == 0
        assert string_hash("hello") == 99162322
        assert string_hash("Hello World") == -862545276

    def test_wraps_to_signed_32_bits(self):
        value = string_hash("a fairly long sentence that overflows many times")
        assert -(2**31) <= value < 2**31

    def test_hashes_utf8_bytes(self):
        # "é" is 0xC3 0xA9 in UTF-8: 195 * 31 + 169
        assert string_hash("é") == 6214


# =============================================================================
# SdkState Tests
# =============================================================================


class TestSdkState:
    def test_user_language_override(self, state):
        state.set_user_language_override("test-user-123", "es")
        assert state.get_user_language_override("test-user-123") == "es"
        
        state.remove_user_language_override("test-user-123")
        assert state.get_user_language_override("test-user-123") is None

    def test_server_language_override(self, state):
        state.set_server_language_override("test-user-123", "fr")
        assert state.get_server_language_override("test-user-123") == "fr"
        
        state.remove_server_language_override("test-user-123")
        assert state.get_server_language_override("test-user-123") is None

    def test_overrides_are_per_user(self, state):
        state.set_user_language_override("alice", "de")
        assert state.get_user_language_override("bob") is None

    def test_last_sync_defaults_to_zero(self, state):
        assert state.get_last_sync("es") == 0
        
        state.set_last_sync("es", 1234567890)
        assert state.get_last_sync("es") == 1234567890
        assert state.get_last_sync("fr") == 0

    def test_stored_user_id(self, state):
        assert state.get_stored_user_id() is None
        
        state.store_user_id("abc@app")
        assert state.get_stored_user_id() == "abc@app"
        assert state.store.get("ai.gettranslated.sdk_config_global_user_id") == "abc@app"
        
        state.remove_stored_user_id()
        assert state.get_stored_user_id() is None

    def test_app_name(self, state):
        state.store_app_name("Demo")
        assert state.get_app_name() == "Demo"
        assert state.store.get("ai.gettranslated.sdk_config_global_app_name") == "Demo"


# =============================================================================
# Store Tests
# =============================================================================


class TestInMemoryStore:
    def test_set_get_delete(self):
        store = InMemoryKeyValueStore()
        store.set("a", "1")
        
        assert store.get("a") == "1"
        assert store.exists("a")
        assert store.delete("a") is True
        assert store.delete("a") is False
        assert store.get("a") is None

    def test_typed_getters(self):
        store = InMemoryKeyValueStore({"s": "text", "n": 42})
        
        assert store.get_str("s") == "text"
        assert store.get_str("n") is None
        assert store.get_int("n") == 42
        assert store.get_int("s", default=7) == 7


class TestJsonFileStore:
    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "state.json"
        store = JsonFileKeyValueStore(path)
        store.set("key", "value")
        store.set("count", 3)
        
        reopened = JsonFileKeyValueStore(path)
        assert reopened.get("key") == "value"
        assert reopened.get_int("count") == 3

    def test_delete_persists(self, tmp_path):
        path = tmp_path / "state.json"
        store = JsonFileKeyValueStore(path)
        store.set("key", "value")
        store.delete("key")
        
        assert json.loads(path.read_text()) == {}

    def test_failed_write_leaves_store_unchanged(self, tmp_path, monkeypatch):
        path = tmp_path / "state.json"
        store = JsonFileKeyValueStore(path)
        store.set("key", "old")
        
        def fail_replace(src, dst):
            raise OSError("disk full")
        
        monkeypatch.setattr("gettranslated.storage.local.os.replace", fail_replace)
        
        with pytest.raises(OSError):
            store.set("key", "new")
        with pytest.raises(OSError):
            store.delete("key")
        
        assert store.get("key") == "old"
        assert json.loads(path.read_text()) == {"key": "old"}

    def test_corrupt_file_starts_empty(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("not json")
        
        assert JsonFileKeyValueStore(path).get("anything") is None

    def test_create_store(self, tmp_path):
        assert isinstance(create_store(""), InMemoryKeyValueStore)
        assert isinstance(create_store(str(tmp_path / "s.json")), JsonFileKeyValueStore)
