"""
Key-Value Store Module

This module implements the core key-value storage: a mapping from string
keys to string values that can be shared by every in-flight request.
"""

import threading
from typing import Any, Dict, Tuple


class KVStore:
    """
    Thread-safe in-memory key-value store.

    Requests are dispatched on worker threads, so every access to the
    mapping goes through a single lock. A reader always observes the value
    of some completed ``set``, never a partial write.

    Missing keys are a normal outcome: ``get`` reports them through its
    ``found`` flag instead of raising.

    Internal Storage:
        Plain dict, key -> value. Insertion order is irrelevant.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._store: Dict[str, str] = {}

    def get(self, key: str) -> Tuple[str, bool]:
        """
        Retrieve the value for a given key.

        Args:
            key: The key to look up (any string, including empty)

        Returns:
            ``(value, True)`` if the key is present, ``("", False)`` otherwise
        """
        with self._lock:
            if key not in self._store:
                return "", False
            return self._store[key], True

    def set(self, key: str, value: str) -> None:
        """
        Associate ``key`` with ``value``, replacing any prior value.

        Args:
            key: The key to store
            value: The value to associate with the key (may be empty)
        """
        with self._lock:
            self._store[key] = value

    def size(self) -> int:
        """Get the current number of keys in the store."""
        with self._lock:
            return len(self._store)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the store.

        Returns:
            Dictionary containing:
            - total_keys: Total keys in store
            - total_value_bytes: Sum of UTF-8 encoded value lengths
        """
        with self._lock:
            total = len(self._store)
            value_bytes = sum(len(v.encode("utf-8")) for v in self._store.values())

        return {
            "total_keys": total,
            "total_value_bytes": value_bytes,
        }
