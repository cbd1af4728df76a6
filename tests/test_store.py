"""
Tests for the key-value store strategies.
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from shortlink_app.exceptions import StoreError
from shortlink_app.store.factory import StoreBackend, StoreFactory
from shortlink_app.store.strategies import InMemoryStore, RedisStore


class TestInMemoryStore:
    """Test the dict-backed store used in development and tests"""

    def test_strings(self):
        store = InMemoryStore(prefix="test:")
        assert asyncio.run(store.get("missing")) is None

        asyncio.run(store.set("key", "value"))
        assert asyncio.run(store.get("key")) == "value"
        assert asyncio.run(store.exists("key")) is True

        assert asyncio.run(store.delete("key")) is True
        assert asyncio.run(store.delete("key")) is False
        assert asyncio.run(store.exists("key")) is False

    def test_ttl_expires(self):
        store = InMemoryStore()
        clock = [1000.0]
        store._clock = lambda: clock[0]

        asyncio.run(store.set("session", "value", ttl=10))
        clock[0] += 9
        assert asyncio.run(store.get("session")) == "value"
        clock[0] += 1
        assert asyncio.run(store.get("session")) is None

    def test_hashes(self):
        store = InMemoryStore()
        assert asyncio.run(store.get_hash("link")) == {}

        asyncio.run(store.set_hash("link", {"url": "https://example.com", "clicks": "0"}))
        assert asyncio.run(store.increment_hash_field("link", "clicks")) == 1
        assert asyncio.run(store.increment_hash_field("link", "clicks", 5)) == 6
        assert asyncio.run(store.get_hash("link")) == {
            "url": "https://example.com",
            "clicks": "6",
        }

    def test_lists(self):
        store = InMemoryStore()
        for value in ["a", "b", "a"]:
            asyncio.run(store.add_to_list("list", value))
        assert asyncio.run(store.get_list("list")) == ["a", "b", "a"]

        # Only the first occurrence goes
        asyncio.run(store.remove_from_list("list", "a"))
        assert asyncio.run(store.get_list("list")) == ["b", "a"]

        asyncio.run(store.remove_from_list("list", "b"))
        asyncio.run(store.remove_from_list("list", "a"))
        assert asyncio.run(store.exists("list")) is False

    def test_set_if_absent(self):
        store = InMemoryStore()
        assert asyncio.run(store.set_if_absent("user", "first")) is True
        assert asyncio.run(store.set_if_absent("user", "second")) is False
        assert asyncio.run(store.get("user")) == "first"

    def test_wrong_type(self):
        store = InMemoryStore()
        asyncio.run(store.set("key", "value"))
        with pytest.raises(StoreError):
            asyncio.run(store.get_hash("key"))

    def test_prefixes_are_isolated(self):
        store = InMemoryStore(prefix="one:")
        other = InMemoryStore(prefix="two:")
        other._data = store._data

        asyncio.run(store.set("key", "value"))
        assert asyncio.run(other.get("key")) is None


class TestRedisStore:
    """Test the Redis store against a mocked async client"""

    def make_store(self):
        client = MagicMock()
        for name in ["ping", "exists", "get", "set", "delete", "hset", "hgetall",
                     "hincrby", "lpush", "lrem", "lrange", "aclose"]:
            setattr(client, name, AsyncMock())
        return RedisStore(client, prefix="shortlink:"), client

    def test_keys_are_prefixed(self):
        store, client = self.make_store()
        client.get.return_value = "1"
        client.hgetall.return_value = {"url": "https://example.com", "clicks": "2"}
        client.lrange.return_value = ["docs"]

        assert asyncio.run(store.get("version")) == "1"
        asyncio.run(store.set_hash("link:docs", {"url": "https://example.com"}))
        asyncio.run(store.get_hash("link:docs"))
        asyncio.run(store.add_to_list("links", "docs"))
        asyncio.run(store.remove_from_list("links", "docs"))
        assert asyncio.run(store.get_list("links")) == ["docs"]

        client.get.assert_awaited_once_with("shortlink:version")
        client.hset.assert_awaited_once_with(
            "shortlink:link:docs", mapping={"url": "https://example.com"}
        )
        client.hgetall.assert_awaited_once_with("shortlink:link:docs")
        client.lpush.assert_awaited_once_with("shortlink:links", "docs")
        client.lrem.assert_awaited_once_with("shortlink:links", 1, "docs")
        client.lrange.assert_awaited_once_with("shortlink:links", 0, -1)

    def test_set_with_and_without_ttl(self):
        store, client = self.make_store()

        asyncio.run(store.set("forever", "value"))
        client.set.assert_awaited_with("shortlink:forever", "value")

        asyncio.run(store.set("brief", "value", ttl=30))
        client.set.assert_awaited_with("shortlink:brief", "value", ex=30)

    def test_set_if_absent_uses_nx(self):
        store, client = self.make_store()
        client.set.return_value = None

        assert asyncio.run(store.set_if_absent("user", "hash")) is False
        client.set.assert_awaited_once_with("shortlink:user", "hash", nx=True)

        client.set.return_value = True
        assert asyncio.run(store.set_if_absent("user", "hash")) is True

    def test_increment_uses_hincrby(self):
        store, client = self.make_store()
        client.hincrby.return_value = 4

        assert asyncio.run(store.increment_hash_field("link:docs", "clicks")) == 4
        client.hincrby.assert_awaited_once_with("shortlink:link:docs", "clicks", 1)

    def test_errors_are_wrapped(self):
        store, client = self.make_store()
        client.get.side_effect = RedisConnectionError("connection refused")

        with pytest.raises(StoreError) as exc_info:
            asyncio.run(store.get("version"))
        assert "version" in exc_info.value.message

    def test_close(self):
        store, client = self.make_store()
        asyncio.run(store.close())
        client.aclose.assert_awaited_once()


class TestStoreFactory:
    """Test store factory"""

    def test_creates_memory_store(self):
        StoreFactory.clear_instance()
        store = StoreFactory.create(StoreBackend.MEMORY)
        assert isinstance(store, InMemoryStore)
        assert StoreFactory.create(StoreBackend.MEMORY) is store
        StoreFactory.clear_instance()

    def test_creates_redis_store(self):
        StoreFactory.clear_instance()
        store = StoreFactory.create(StoreBackend.REDIS)
        assert isinstance(store, RedisStore)
        assert store.prefix == "shortlink:"
        StoreFactory.clear_instance()

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            StoreBackend("sqlite")
