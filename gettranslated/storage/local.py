"""
Local key-value store implementations.

In-memory for tests and short-lived processes, JSON file for anything
that should survive a restart.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path

from gettranslated.storage.base import KeyValueStore, StoredValue

logger = logging.getLogger(__name__)


# =============================================================================
# In-Memory Store
# =============================================================================


class InMemoryKeyValueStore(KeyValueStore):
    """In-memory store; contents are lost when the process exits."""
    
    def __init__(self, initial: dict[str, StoredValue] | None = None):
        self._data: dict[str, StoredValue] = dict(initial or {})
        self._lock = threading.Lock()
    
    def get(self, key: str) -> StoredValue | None:
        with self._lock:
            return self._data.get(key)
    
    def set(self, key: str, value: StoredValue) -> None:
        with self._lock:
            self._data[key] = value
    
    def delete(self, key: str) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None

# =============================================================================
# JSON File Store
# =============================================================================


class JsonFileKeyValueStore(KeyValueStore):
    """
    Store persisted to a single JSON file.
    
    The whole file is rewritten on every mutation (write to a temporary
    file, then rename), which is fine for the small number of keys the
    SDK keeps.
    """
    
    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._data: dict[str, StoredValue] = self._load()
    
    def _load(self) -> dict[str, StoredValue]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Could not read store {self.path}, starting empty: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Store {self.path} is not a JSON object, starting empty")
            return {}
        return data
    
    def _flush(self, data: dict[str, StoredValue]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, self.path)
    
    def get(self, key: str) -> StoredValue | None:
        with self._lock:
            return self._data.get(key)
    
    def set(self, key: str, value: StoredValue) -> None:
        with self._lock:
            data = {**self._data, key: value}
            # Memory only changes once the file is written
            self._flush(data)
            self._data = data
    
    def delete(self, key: str) -> bool:
        with self._lock:
            if key not in self._data:
                return False
            data = {k: v for k, v in self._data.items() if k != key}
            self._flush(data)
            self._data = data
            return True


# =============================================================================
# Factory
# =============================================================================


def create_store(storage_path: str = "") -> KeyValueStore:
    """JSON file store when a path is given, otherwise in-memory."""
    if storage_path:
        return JsonFileKeyValueStore(storage_path)
    return InMemoryKeyValueStore()
