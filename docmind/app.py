"""FastAPI host application for the chat UI.

NiceGUI is mounted onto this app; it adds a health endpoint and closes the
shared backend gateway on shutdown.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from docmind.gateway.client import close_gateway

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting DocuMind UI...")
    yield
    await close_gateway()
    logger.info("Shutting down DocuMind UI...")


def create_app() -> FastAPI:
    """Create and configure the host FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="DocuMind AI",
        description="Chat interface for document-grounded Q&A sessions.",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "docmind-ui"}

    return application
