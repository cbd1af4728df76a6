import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortlink_app.auth.secret import load_session_secret
from shortlink_app.auth.tokens import TokenService
from shortlink_app.config import settings
from shortlink_app.dependencies import get_store
from shortlink_app.exceptions import ShortlinkError
from shortlink_app.logging_config import configure_logging
from shortlink_app.middleware.logging import LoggingMiddleware
from shortlink_app.services.versioning import ensure_version, get_version
from shortlink_app.store.strategies import KeyValueStore
from shortlink_app.api.v1 import auth, links, qrcode, redirect
from shortlink_app.web import pages

configure_logging(settings)
logger = logging.getLogger("shortlink")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Check the store, record its schema version and load the session secret"""
    store = get_store()
    await store.ping()
    await ensure_version(store, settings.schema_version)

    secret = await load_session_secret(store, settings.jwt_secret)
    app.state.token_service = TokenService(
        secret,
        cookie_name=settings.session_cookie_name,
        login_duration=timedelta(seconds=settings.session_duration_seconds),
        cookie_secure=settings.cookie_secure,
    )
    logger.info("%s %s started", settings.app_name, settings.app_version)
    yield
    await store.close()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A URL shortener service built with FastAPI",
    debug=settings.debug,
    lifespan=lifespan,
)
app.add_middleware(LoggingMiddleware)


@app.get("/health")
async def health_check(store: KeyValueStore = Depends(get_store)):
    """Health check endpoint"""
    return {
        "status": "healthy",
        "environment": settings.environment,
        "schema_version": await get_version(store),
    }


######## Error handling

@app.exception_handler(ShortlinkError)
async def shortlink_exception_handler(request: Request, exc: ShortlinkError):
    if exc.status_code >= 500:
        logger.error("%s at %s: %s", type(exc).__name__, request.url.path, exc.message)
    else:
        logger.warning("%s at %s: %s", type(exc).__name__, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.warning("HTTPException %s at %s: %s", exc.status_code, request.url.path, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Validation error at %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=422,
        content={"detail": "Invalid request data", "errors": jsonable_errors(exc)},
    )


@app.exception_handler(Exception)
async def internal_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error at %s: %s", request.url.path, exc, exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def jsonable_errors(exc: RequestValidationError):
    """Validation errors without the raw exception objects pydantic attaches to ctx"""
    errors = []
    for error in exc.errors():
        error = dict(error)
        if "ctx" in error:
            error["ctx"] = {key: str(value) for key, value in error["ctx"].items()}
        errors.append(error)
    return errors


######## Include routers (redirect must stay last, it matches any slug)
app.include_router(auth.router, prefix="/api/v1")
app.include_router(links.router, prefix="/api/v1")
app.include_router(qrcode.router)
app.include_router(pages.router)
app.include_router(redirect.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.host, port=settings.port)
