"""Waitlist API — application factory and ASGI entry point (`waitlist.main:app`).

Invariants:
    - Logging is configured and the session manager exists before the first request
    - The session manager is disposed on shutdown, after the last request
    - Routers and error handlers are registered explicitly, once per app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from waitlist import __version__
from waitlist.api.error_handlers import register_error_handlers
from waitlist.api.routes import health, members, queues
from waitlist.config import Settings, get_settings
from waitlist.infrastructure.database import init_db
from waitlist.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level, settings.log_format)
        manager = init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        logger.info(f"Waitlist API {__version__} ready (horizon {settings.queue_horizon_days}d)")
        try:
            yield
        finally:
            await manager.dispose()
            logger.info("Waitlist API stopped")

    app = FastAPI(title="Waitlist API", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type"],
    )
    for module in (health, queues, members):
        app.include_router(module.router)
    register_error_handlers(app)
    return app


app = create_app()
