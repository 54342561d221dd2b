"""ASGI app: wormhole.main:app."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from wormhole.api.middleware.error_handler import error_handler_middleware
from wormhole.api.middleware.latency_logging import latency_logging_middleware
from wormhole.api.routes import auth, friends, health, profiles, worms
from wormhole.core.config import Settings, get_settings
from wormhole.core.supabase import init_supabase_client, shutdown_supabase_client

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

API_ROUTERS = (auth.router, profiles.router, friends.router, worms.router)

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Hold the process-wide Supabase client for the app's lifetime."""
    settings = get_settings()
    init_supabase_client(settings)
    logger.info("%s started (%s)", settings.app_name, settings.app_env)
    try:
        yield
    finally:
        shutdown_supabase_client()
        logger.info("%s stopped", settings.app_name)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app with CORS, error mapping, latency logging and all routers.

    Interactive docs are only served when DEBUG is on.
    """
    settings = settings or get_settings()
    docs = settings.debug

    app = FastAPI(
        title="Wormhole API",
        description="Profiles, friends and worms on Supabase",
        version="0.1.0",
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        openapi_url="/openapi.json" if docs else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Added last runs first: latency logging sees the mapped error status
    app.add_middleware(BaseHTTPMiddleware, dispatch=error_handler_middleware)
    app.add_middleware(BaseHTTPMiddleware, dispatch=latency_logging_middleware)

    app.include_router(health.router)
    v1 = APIRouter(prefix="/api/v1")
    for router in API_ROUTERS:
        v1.include_router(router)
    app.include_router(v1)

    return app


configure_logging(get_settings())
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("wormhole.main:app", host=settings.host, port=settings.port, reload=settings.debug)
