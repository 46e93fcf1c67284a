"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nexus import __version__
from nexus.config.schema import NexusConfig
from nexus.llm.client import LLMClient
from nexus.server.errors import install_error_handlers
from nexus.server.routes import create_router
from nexus.server.services import Services, build_services
from nexus.storage import Database

logger = logging.getLogger(__name__)


def create_app(
    config: NexusConfig,
    llm_client: LLMClient | None = None,
    db: Database | None = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        config: Nexus configuration
        llm_client: Optional LLM client overriding the configured provider
        db: Optional database overriding ``config.database.path``

    Returns:
        Configured FastAPI app
    """
    services: Services = build_services(config, llm_client=llm_client, db=db)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Nexus API ready (model=%s)", services.provider.model)
        yield
        await services.close()
        logger.info("Nexus API stopped")

    app = FastAPI(
        title="Nexus",
        description="Mental-wellness companion API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    install_error_handlers(app)
    app.include_router(create_router(services))

    return app
