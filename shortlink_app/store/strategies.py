"""
Key-value store strategies using Strategy Pattern.
Allows switching between store backends (Redis/Valkey, In-Memory).
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional
import time

from redis.exceptions import RedisError

from shortlink_app.exceptions import StoreError


class KeyValueStore(ABC):
    """
    Abstract base class for key-value stores.

    Exposes the handful of string, hash and list primitives the service
    layer needs. Every key is namespaced with ``prefix`` by the backend,
    callers always pass bare keys.

    All methods are async because store operations involve network I/O.
    """

    def __init__(self, prefix: str = ""):
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    @abstractmethod
    async def ping(self) -> bool:
        """Check the store is reachable"""
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        pass

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Get a string value.

        Returns:
            The value or None if the key does not exist
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl: int = 0) -> None:
        """
        Set a string value.

        Args:
            key: Store key
            value: Value to store
            ttl: Time to live in seconds, 0 means no expiration
        """
        pass

    @abstractmethod
    async def set_if_absent(self, key: str, value: str) -> bool:
        """
        Set a string value only if the key does not exist yet.

        Returns:
            True if the value was written
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete a key of any type.

        Returns:
            True if the key existed
        """
        pass

    @abstractmethod
    async def set_hash(self, key: str, values: Dict[str, str]) -> None:
        pass

    @abstractmethod
    async def get_hash(self, key: str) -> Dict[str, str]:
        """Get all fields of a hash, empty dict if the key does not exist"""
        pass

    @abstractmethod
    async def increment_hash_field(self, key: str, field: str, amount: int = 1) -> int:
        """
        Atomically increment an integer hash field.

        Returns:
            The value after the increment
        """
        pass

    @abstractmethod
    async def add_to_list(self, key: str, value: str) -> None:
        """Push a value onto the head of a list"""
        pass

    @abstractmethod
    async def remove_from_list(self, key: str, value: str) -> None:
        """Remove the first occurrence of a value from a list"""
        pass

    @abstractmethod
    async def get_list(self, key: str) -> List[str]:
        pass

    async def close(self) -> None:
        """Release backend resources"""
        return None


class RedisStore(KeyValueStore):
    """
    Redis (or Valkey) store implementation.

    Wraps a ``redis.asyncio.Redis`` client created with
    ``decode_responses=True``. The client owns a connection pool that all
    requests share. Redis errors are re-raised as StoreError naming the key.
    """

    def __init__(self, redis_client, prefix: str = ""):
        """
        Initialize Redis store.

        Args:
            redis_client: Async Redis client instance (redis.asyncio.Redis)
            prefix: Namespace prepended to every key
        """
        super().__init__(prefix)
        self.redis = redis_client

    async def ping(self) -> bool:
        try:
            return bool(await self.redis.ping())
        except RedisError as e:
            raise StoreError(f"Could not reach the store: {e}") from e

    async def exists(self, key: str) -> bool:
        try:
            return bool(await self.redis.exists(self._key(key)))
        except RedisError as e:
            raise StoreError(f"Could not check if key {key} exists: {e}") from e

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self.redis.get(self._key(key))
        except RedisError as e:
            raise StoreError(f"Could not get key {key}: {e}") from e

    async def set(self, key: str, value: str, ttl: int = 0) -> None:
        try:
            if ttl:
                await self.redis.set(self._key(key), value, ex=ttl)
            else:
                await self.redis.set(self._key(key), value)
        except RedisError as e:
            raise StoreError(f"Could not set key {key}: {e}") from e

    async def set_if_absent(self, key: str, value: str) -> bool:
        try:
            return bool(await self.redis.set(self._key(key), value, nx=True))
        except RedisError as e:
            raise StoreError(f"Could not set key {key}: {e}") from e

    async def delete(self, key: str) -> bool:
        try:
            return bool(await self.redis.delete(self._key(key)))
        except RedisError as e:
            raise StoreError(f"Could not delete key {key}: {e}") from e

    async def set_hash(self, key: str, values: Dict[str, str]) -> None:
        try:
            await self.redis.hset(self._key(key), mapping=values)
        except RedisError as e:
            raise StoreError(f"Could not set hash for key {key}: {e}") from e

    async def get_hash(self, key: str) -> Dict[str, str]:
        try:
            return await self.redis.hgetall(self._key(key))
        except RedisError as e:
            raise StoreError(f"Could not get hash for key {key}: {e}") from e

    async def increment_hash_field(self, key: str, field: str, amount: int = 1) -> int:
        try:
            return int(await self.redis.hincrby(self._key(key), field, amount))
        except RedisError as e:
            raise StoreError(f"Could not increment {field} of hash {key}: {e}") from e

    async def add_to_list(self, key: str, value: str) -> None:
        try:
            await self.redis.lpush(self._key(key), value)
        except RedisError as e:
            raise StoreError(f"Could not add value {value} to list {key}: {e}") from e

    async def remove_from_list(self, key: str, value: str) -> None:
        try:
            await self.redis.lrem(self._key(key), 1, value)
        except RedisError as e:
            raise StoreError(f"Could not remove value {value} from list {key}: {e}") from e

    async def get_list(self, key: str) -> List[str]:
        try:
            return await self.redis.lrange(self._key(key), 0, -1)
        except RedisError as e:
            raise StoreError(f"Could not get list {key}: {e}") from e

    async def close(self) -> None:
        await self.redis.aclose()


class InMemoryStore(KeyValueStore):
    """
    In-memory store implementation using Python dicts.

    Pros:
    - Very fast (no network overhead)
    - Simple (no external dependencies)
    - Good for development and testing

    Cons:
    - Not shared between processes
    - Lost on restart

    Expired string keys are dropped lazily on access.
    Note: Async for interface consistency, but operations are instant.
    """

    def __init__(self, prefix: str = ""):
        super().__init__(prefix)
        self._data: Dict[str, object] = {}
        self._expires: Dict[str, float] = {}
        self._clock = time.monotonic

    def _lookup(self, key: str):
        full_key = self._key(key)
        deadline = self._expires.get(full_key)
        if deadline is not None and deadline <= self._clock():
            self._data.pop(full_key, None)
            self._expires.pop(full_key, None)
        return self._data.get(full_key)

    def _typed(self, key: str, kind: type):
        value = self._lookup(key)
        if value is not None and not isinstance(value, kind):
            raise StoreError(
                f"Key {key} holds a {type(value).__name__}, not a {kind.__name__}"
            )
        return value

    async def ping(self) -> bool:
        return True

    async def exists(self, key: str) -> bool:
        return self._lookup(key) is not None

    async def get(self, key: str) -> Optional[str]:
        return self._typed(key, str)

    async def set(self, key: str, value: str, ttl: int = 0) -> None:
        full_key = self._key(key)
        self._data[full_key] = value
        if ttl:
            self._expires[full_key] = self._clock() + ttl
        else:
            self._expires.pop(full_key, None)

    async def set_if_absent(self, key: str, value: str) -> bool:
        if self._lookup(key) is not None:
            return False
        await self.set(key, value)
        return True

    async def delete(self, key: str) -> bool:
        existed = self._lookup(key) is not None
        full_key = self._key(key)
        self._data.pop(full_key, None)
        self._expires.pop(full_key, None)
        return existed

    async def set_hash(self, key: str, values: Dict[str, str]) -> None:
        current = self._typed(key, dict)
        if current is None:
            current = self._data[self._key(key)] = {}
        current.update({field: str(value) for field, value in values.items()})

    async def get_hash(self, key: str) -> Dict[str, str]:
        return dict(self._typed(key, dict) or {})

    async def increment_hash_field(self, key: str, field: str, amount: int = 1) -> int:
        current = self._typed(key, dict)
        if current is None:
            current = self._data[self._key(key)] = {}
        try:
            value = int(current.get(field, 0)) + amount
        except ValueError as e:
            raise StoreError(f"Field {field} of hash {key} is not an integer") from e
        current[field] = str(value)
        return value

    async def add_to_list(self, key: str, value: str) -> None:
        current = self._typed(key, list)
        if current is None:
            current = self._data[self._key(key)] = []
        current.insert(0, value)

    async def remove_from_list(self, key: str, value: str) -> None:
        current = self._typed(key, list)
        if current and value in current:
            current.remove(value)
            if not current:
                await self.delete(key)

    async def get_list(self, key: str) -> List[str]:
        return list(self._typed(key, list) or [])
