"""FastAPI application wiring for the auth service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from psycopg_pool import ConnectionPool

from .api.handlers import install_error_handlers
from .api.routes import router as api_router
from .config import Settings, get_settings
from .domain.service import AuthService
from .frontend import mount_frontend
from .repository import UserRepository

logger = logging.getLogger(__name__)


def create_app(settings: Settings) -> FastAPI:
    """Build the application; the database pool is opened by the lifespan."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialise shared resources (Postgres pool, services) for the app lifecycle."""
        pool = ConnectionPool(
            settings.conninfo,
            min_size=settings.db_pool_min,
            max_size=settings.db_pool_max,
            open=False,
        )
        pool.open()
        try:
            app.state.pool = pool
            repository = UserRepository(pool)
            if settings.db_auto_migrate:
                repository.ensure_schema()
            app.state.auth_service = AuthService(repository, bcrypt_rounds=settings.bcrypt_rounds)
            logger.info(
                "database pool opened for %s@%s/%s", settings.db_user, settings.db_host, settings.db_name
            )
            yield
        finally:
            pool.close()
            logger.info("database pool closed")

    app = FastAPI(title=settings.app_name, version=settings.version, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    @app.get("/healthz", tags=["health"])
    def healthz() -> dict[str, str]:
        """Return a minimal readiness indicator used by orchestration systems."""
        return {"status": "ok"}

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(api_router)
    mount_frontend(app, settings.static_dir)
    return app


app = create_app(get_settings())
