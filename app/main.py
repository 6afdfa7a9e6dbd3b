"""FastAPI application entry point.

Configures structured logging, the lifespan hooks, the health router and
the method-dispatched alunos surface.
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI

from app.core.config import settings
from app.core.logging import setup_logging
from app.routers import alunos, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: startup and shutdown hooks."""
    setup_logging()
    logger.info("Application starting up")
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="Alunos API",
    description="Backend de cadastro de alunos sobre Supabase",
    version="0.1.0",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# Router Registration
# ---------------------------------------------------------------------------
app.include_router(health.router, tags=["Health"])

# CORS headers are set by the alunos endpoint itself, which also answers
# OPTIONS, so no CORSMiddleware is installed.
for _path in alunos.route_paths(settings.FUNCTION_NAME):
    app.add_route(_path, alunos.endpoint, include_in_schema=False)
