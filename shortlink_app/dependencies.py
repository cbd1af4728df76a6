"""
FastAPI dependencies for dependency injection.

This module provides the store singleton and the services built on it,
plus the session guard used by protected API routes.

Pattern: Dependency Injection
- Loose coupling between components
- Easy to test (inject mocks)
- Flexible (swap implementations via config)
"""

from functools import lru_cache

from fastapi import Depends, HTTPException, Request, status

from shortlink_app.auth.tokens import TokenService
from shortlink_app.config import settings
from shortlink_app.store.factory import StoreFactory, StoreBackend
from shortlink_app.store.strategies import KeyValueStore
from shortlink_app.services.account_service import AccountService
from shortlink_app.services.link_service import LinkService


@lru_cache()
def get_store() -> KeyValueStore:
    """
    Get store instance (singleton).

    Factory gets config from settings internally.
    @lru_cache ensures this is called only once.

    Returns:
        KeyValueStore instance based on settings
    """
    backend = StoreBackend(settings.store_backend)
    return StoreFactory.create(backend)


def get_link_service(store: KeyValueStore = Depends(get_store)) -> LinkService:
    return LinkService(store=store)


def get_account_service(store: KeyValueStore = Depends(get_store)) -> AccountService:
    return AccountService(store=store)


def get_token_service(request: Request) -> TokenService:
    """
    Token service created at startup.

    It lives on app.state because its secret may come from the store,
    which can only be read once the event loop is running.
    """
    return request.app.state.token_service


def require_session(
    request: Request,
    token_service: TokenService = Depends(get_token_service)
) -> None:
    """Reject API requests without a valid session cookie"""
    if not token_service.validate_request(request):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not logged in"
        )
