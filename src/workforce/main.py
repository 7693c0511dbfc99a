"""
Application factory.

    uvicorn workforce.main:app

The lifespan configures logging, builds the engine and session factory,
creates the `documents` table and puts the DocumentRepository on `app.state`,
where request dependencies (workforce.api.deps) pick it up.
"""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI

from workforce.api.v1 import api_router
from workforce.api.v1.error_handlers import register_exception_handlers
from workforce.config.settings import Settings, get_settings
from workforce.core.logging import setup_logging, stop_queue_logging, RequestIDMiddleware
from workforce.database.session import create_engine, create_session_factory, init_models
from workforce.repositories.document_repository import DocumentRepository

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings)

        engine = create_engine(settings)
        await init_models(engine)
        app.state.settings = settings
        app.state.engine = engine
        app.state.repository = DocumentRepository(create_session_factory(engine))
        app.state.started_at = time.monotonic()
        logger.info("app.startup", extra={"env": settings.ENV, "api_prefix": settings.API_PREFIX})

        try:
            yield
        finally:
            logger.info("app.shutdown")
            await engine.dispose()
            stop_queue_logging()

    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, lifespan=lifespan)

    register_exception_handlers(app)
    # Added last so it wraps everything, error responses included
    app.add_middleware(RequestIDMiddleware)

    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


app = create_app()
