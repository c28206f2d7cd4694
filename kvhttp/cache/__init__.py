"""Cache module for kvhttp."""

from .store import KVStore

__all__ = ["KVStore"]
