from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .db.migrate import apply_migrations
from .core import errors
from .routers import (
    budgets,
    cash,
    conversions,
    currencies,
    expenses,
    health,
    preferences,
    rates,
    trips,
)
from .services.currency_service import build_currency_service

logger = logging.getLogger("wander_ledger")


def create_app(settings_override: Settings | None = None) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., temp DB or memory backend). Falls back to
    cached get_settings().
    """
    settings = settings_override or get_settings()
    # Initialize logging early
    init_logging(debug=settings.debug)

    # Ensure database schema (idempotent) so test-injected fresh DBs have tables
    if settings.storage_backend == "sqlite":
        try:
            apply_migrations(settings.db_path)  # type: ignore[arg-type]
        except Exception:
            # Failing to init DB is fatal; re-raise after logging
            logger.exception("failed to apply migrations on startup")
            raise

    service = build_currency_service(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await service.initialize()
        if settings.auto_refresh_rates:
            service.refresher.start()
        yield
        await service.refresher.stop()

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.currency_service = service

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(errors.StorageError, errors.storage_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(currencies.router)
    app.include_router(preferences.router)
    app.include_router(rates.router)
    app.include_router(conversions.router)
    app.include_router(expenses.router)
    app.include_router(budgets.router)
    app.include_router(cash.router)
    app.include_router(trips.router)

    @app.get("/")
    async def root():
        return {"message": "Wander Ledger API", "version": settings.version}

    return app


app = create_app()
