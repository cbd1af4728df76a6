import logging

from shortlink_app.services.slug_generator import generate_random_string
from shortlink_app.store.strategies import KeyValueStore

logger = logging.getLogger("shortlink.auth")

SECRET_KEY = "jwt-secret"
GENERATED_SECRET_LENGTH = 32


async def load_session_secret(store: KeyValueStore, configured_secret: str = None) -> str:
    """
    Resolve the token signing secret.

    The configured secret (JWT_SECRET) wins, then the one kept in the store.
    Otherwise a new secret is generated and stored, so sessions survive a
    restart. StoreError from that write propagates and aborts startup.
    """
    if configured_secret:
        logger.info("JWT secret provided as an environment variable")
        return configured_secret

    stored_secret = await store.get(SECRET_KEY)
    if stored_secret:
        logger.info("JWT secret provided in the store")
        return stored_secret

    logger.info("Generating JWT secret and saving it in the store")
    secret = generate_random_string(GENERATED_SECRET_LENGTH)
    await store.set(SECRET_KEY, secret)
    return secret
