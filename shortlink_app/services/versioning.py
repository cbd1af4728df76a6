import logging
from typing import Optional

from shortlink_app.store.strategies import KeyValueStore

logger = logging.getLogger("shortlink.store")

VERSION_KEY = "version"


async def get_version(store: KeyValueStore) -> Optional[str]:
    return await store.get(VERSION_KEY)


async def ensure_version(store: KeyValueStore, expected: str) -> bool:
    """
    Compare the stored schema version with ``expected``.

    A missing or different marker is logged and overwritten. There is no
    migration step, the marker is informational.

    Returns:
        True if the stored version already matched
    """
    current = await get_version(store)
    if current == expected:
        logger.info("Store schema version %s", current)
        return True

    logger.error(
        "Store schema version is %s, expected %s. Setting version to %s",
        current, expected, expected
    )
    await store.set(VERSION_KEY, expected)
    return False
