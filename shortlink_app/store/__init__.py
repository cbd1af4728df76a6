"""
Key-value store module.
Implements Strategy Pattern for interchangeable store backends.
"""

from .strategies import KeyValueStore, RedisStore, InMemoryStore
from .factory import StoreFactory, StoreBackend

__all__ = [
    "KeyValueStore",
    "RedisStore",
    "InMemoryStore",
    "StoreFactory",
    "StoreBackend",
]
