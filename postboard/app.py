import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from postboard import __version__
from postboard.core.config import Settings, get_settings
from postboard.repositories.errors import (
    AlreadyExists,
    CorruptStore,
    InvalidRecord,
    NotFound,
    StoreError,
    StoreIOError,
)
from postboard.repositories.json_storage import JSONStore, ensure_store
from postboard.routers import posts as posts_router
from postboard.routers import users as users_router
from postboard.services import PostService, UserService

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (NotFound, 404),
    (AlreadyExists, 409),
    (InvalidRecord, 400),
    (CorruptStore, 500),
    (StoreIOError, 500),
)


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Log one line per request and add baseline headers for JSON responses."""

    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Cache-Control", "no-store")
        return response


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def status_for(exc: StoreError) -> int:
    """HTTP status for a store error, chosen by type."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        status_code = status_for(exc)
        if status_code >= 500:
            logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc.message)
        return _error(status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        parts = []
        for err in exc.errors():
            location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
            parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
        return _error(400, "invalid request: " + "; ".join(parts))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            message = "method not supported"
        else:
            message = str(exc.detail)
        return _error(exc.status_code, message)


def create_app(settings: Optional[Settings] = None, store: Optional[JSONStore] = None) -> FastAPI:
    """Build the application around ``store`` (or the one configured by ``DB_PATH``)."""
    settings = settings or get_settings()
    if store is None:
        store = ensure_store(settings.db_path)

    app = FastAPI(title="postboard", version=__version__)
    app.add_middleware(RequestLogMiddleware)
    _install_error_handlers(app)

    app.state.settings = settings
    app.state.store = store
    app.state.user_service = UserService(store, hash_passwords=settings.hash_passwords)
    app.state.post_service = PostService(store)

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    app.include_router(users_router.router)
    app.include_router(posts_router.router)
    return app
