"""
Application factory.

    uvicorn candidate_intake.main:app
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from candidate_intake.api.v1.candidates import router as candidates_router
from candidate_intake.api.v1.error_handlers import register_exception_handlers
from candidate_intake.config.settings import Settings, get_settings
from candidate_intake.core.logging import RequestIDMiddleware, setup_logging
from candidate_intake.database.session import check_connection, engine
from candidate_intake.exceptions.base import StorageInitializationError

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings)
        try:
            await check_connection()
        except StorageInitializationError:
            # Keep serving: writes answer 503 (ConnectionFailureError) until the database is back.
            logger.warning("app.startup.database_unreachable")
        else:
            logger.info("app.startup.database_ok")
        yield
        await engine.dispose()

    app = FastAPI(title="candidate-intake", lifespan=lifespan)
    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    app.include_router(candidates_router)
    return app


app = create_app()
