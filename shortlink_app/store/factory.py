"""
Factory for creating key-value store instances.
Simple, clean factory with singleton caching.
"""

from enum import Enum
import logging

from .strategies import KeyValueStore, RedisStore, InMemoryStore
from shortlink_app.config import settings

logger = logging.getLogger("shortlink.store")


class StoreBackend(Enum):
    """Available store backends"""
    REDIS = "redis"
    MEMORY = "memory"


class StoreFactory:
    """
    Simple factory for creating store instances.

    Uses Singleton Pattern - creates instance once, reuses it.
    Gets configuration from settings (not passed as parameters).
    """

    _instance: KeyValueStore = None  # Single cached instance

    @classmethod
    def create(cls, backend: StoreBackend) -> KeyValueStore:
        """
        Create or return cached store instance.

        Args:
            backend: Type of store backend (from enum)

        Returns:
            Singleton store instance
        """
        # Return cached instance if exists
        if cls._instance is not None:
            return cls._instance

        if backend == StoreBackend.REDIS:
            import redis.asyncio as redis

            if not settings.db_password:
                logger.warning("DB_PASSWORD is not set")

            # The connection is opened lazily; startup pings it
            redis_client = redis.from_url(
                settings.redis_url,
                decode_responses=True,
                socket_connect_timeout=2,
                socket_timeout=2,
            )
            cls._instance = RedisStore(redis_client, prefix=settings.key_prefix)
            logger.info(
                "Redis store configured at %s:%s", settings.db_address, settings.db_port
            )

        elif backend == StoreBackend.MEMORY:
            cls._instance = InMemoryStore(prefix=settings.key_prefix)
            logger.info("In-memory store initialized")

        else:
            raise ValueError(f"Unknown store backend: {backend}")

        return cls._instance

    @classmethod
    def clear_instance(cls):
        """Clear cached instance (for testing)"""
        cls._instance = None
