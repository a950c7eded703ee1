"""
Storage abstraction layer.

The SDK persists a handful of small values (identity, language
preferences, sync timestamps, cached translations) through this
interface. Implementations can wrap any platform preferences store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

# Stored values are strings, except sync timestamps which are integers
StoredValue = str | int


class KeyValueStore(ABC):
    """
    Flat string-keyed store.
    
    Operations are independent per key; there are no transactions.
    Implementations must be safe to call from multiple threads.
    """
    
    @abstractmethod
    def get(self, key: str) -> StoredValue | None:
        """Get a value."""
        pass
    
    @abstractmethod
    def set(self, key: str, value: StoredValue) -> None:
        """Set a value, replacing any previous one."""
        pass
    
    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete a key. Returns whether it existed."""
        pass
    
    def exists(self, key: str) -> bool:
        """Check if key exists."""
        return self.get(key) is not None
    
    def get_str(self, key: str) -> str | None:
        value = self.get(key)
        return value if isinstance(value, str) else None
    
    def get_int(self, key: str, default: int = 0) -> int:
        value = self.get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            return default
        return value
