from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from fastapi import FastAPI

from fibseq.api import public_router
from fibseq.api import router as api_router
from fibseq.api.error_handlers import register_error_handlers
from fibseq.core.config.settings import AppSettings, settings
from fibseq.core.logging.setup import configure_logging
from fibseq.core.sequence.registry import ActorRegistry
from fibseq.storage.factory import build_backend

log = structlog.get_logger()


def create_app(app_settings: AppSettings | None = None) -> FastAPI:
    """
    Application factory.

    The single place where the FastAPI app, its store backend and its
    actor registry are created and wired.
    """
    cfg = app_settings or settings

    configure_logging(level=cfg.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info(
            "app.startup",
            environment=cfg.env,
            store_backend=cfg.store_backend,
            default_sequence=cfg.default_sequence,
        )
        yield
        log.info("app.shutdown", sequences=app.state.registry.names())

    app = FastAPI(
        title="FIBSEQ",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = cfg
    app.state.registry = ActorRegistry(backend=build_backend(cfg))

    register_error_handlers(app)

    app.include_router(api_router, prefix="/api")
    app.include_router(public_router)

    return app


# ASGI entrypoint
app = create_app()
