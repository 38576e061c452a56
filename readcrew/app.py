"""
ReadCrew Recommendation API: FastAPI app factory.

Use: uvicorn readcrew.app:app
Or:  from readcrew import app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .routes import register_routes
from .state import get_state

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build state once, start background jobs, stop them on shutdown."""
    state = get_state()
    ok, errors = state.config.validate()
    for error in errors:
        logger.warning("[startup] config: %s", error)
    logger.info(
        "[startup] ReadCrew API starting (generative=%s, trending ttl=%sh, session retention=%sh)",
        state.generative_available,
        state.config.trending_ttl_hours,
        state.config.session_retention_hours,
    )
    if state.config.background_jobs and ok:
        state.jobs.start()
    yield
    await state.jobs.stop()
    logger.info("[shutdown] ReadCrew API stopped")


def create_app() -> FastAPI:
    """Build FastAPI app with CORS, routes, and lifespan."""
    config = get_config()
    configure_logging(config.log_level)
    app = FastAPI(
        title="ReadCrew Recommendation API",
        description="Conversational book recommendations with trending cache and catalog fallback",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)
    return app


app = create_app()
