"""Persistence for identity, preferences and cached translations."""

from gettranslated.storage.base import KeyValueStore
from gettranslated.storage.keys import SdkState
from gettranslated.storage.local import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    create_store,
)

__all__ = [
    "KeyValueStore",
    "SdkState",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "create_store",
]
