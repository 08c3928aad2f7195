"""
FastAPI application entrypoint.
Thin layer that wires up routers and middleware.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from shopassist.config.settings import settings
from shopassist.config.logging_config import setup_logging, get_logger
from shopassist.interfaces.api.middleware import setup_middleware
from shopassist.interfaces.api.dependencies import init_services
from shopassist.interfaces.api.routers import health, classify, chat

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the catalog and LLM client on startup."""
    logger.info("Initializing services...")
    try:
        init_services()
        logger.info("Services initialized successfully")
    except Exception as e:
        logger.error(f"Service initialization failed: {e}")
        raise
    yield
    logger.info("Shutting down services...")


app = FastAPI(
    title=settings.api_title,
    description="Shopping chat assistant with rule-based intent routing",
    version=settings.api_version,
    lifespan=lifespan,
)

setup_middleware(app)

for router in (health.router, classify.router, chat.router):
    app.include_router(router)
