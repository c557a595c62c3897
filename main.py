"""ValoCoach - Valorant coaching assistant API."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from valocoach.api import router
from valocoach.config import get_settings
from valocoach.dependencies import get_llm_provider, get_supabase_client


def _setup_logging(debug: bool = False) -> None:
    """Configure application logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    _setup_logging(settings.debug)

    provider = get_llm_provider()

    logger.info("Starting %s v%s", settings.app_name, settings.app_version)
    logger.info("Environment: %s", settings.env)
    logger.info("LLM Provider: %s (%s)", provider.provider_name, provider.model_name)

    if get_supabase_client() is None:
        logger.warning("Supabase is not configured, profile endpoints will return 401")
    else:
        logger.info("Record store: %s", settings.supabase_url)

    yield

    logger.info("Shutdown complete")


settings = get_settings()

# Configure CORS based on environment
allowed_origins = ["*"] if settings.is_development else []

app = FastAPI(
    title=settings.app_name,
    description="Valorant coaching assistant with profile and chat history storage",
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
    )
