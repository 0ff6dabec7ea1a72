import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from userapi.core.config import Settings, get_settings
from userapi.core.logging_config import setup_logging
from userapi.repositories import UserStore, build_store
from userapi.routers import users as users_router
from userapi.services.user_service import UserService

logger = logging.getLogger(__name__)

DEV_ORIGINS = (
    "http://localhost:8000",
    "http://127.0.0.1:8000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status code and duration of every request."""

    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("%s %s failed", request.method, request.url.path)
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s -> %d (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response


def create_app(settings: Optional[Settings] = None, store: Optional[UserStore] = None) -> FastAPI:
    """Build the application. ``store`` overrides the backend picked from settings."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title="User CRUD Demo API")
    user_store = store if store is not None else build_store(settings)
    app.state.settings = settings
    app.state.user_service = UserService(store=user_store, settings=settings)
    logger.info("User store ready: %s (%d users)", user_store.describe(), user_store.count())

    allowed_cors = set(settings.cors_origins)
    if settings.app_env != "prod":
        allowed_cors.update(DEV_ORIGINS)
    allowed_cors = {origin for origin in allowed_cors if origin}
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(RequestLoggingMiddleware)

    @app.get("/health")
    def health(request: Request):
        return {"status": "ok", "users": request.app.state.user_service.count()}

    app.include_router(users_router.router)
    return app


app = create_app()
