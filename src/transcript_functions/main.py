"""
Transcript Functions.

Entry point exposing the transcription, delete and export triggers.
"""

import logging
import os
from contextlib import asynccontextmanager

from ddtrace import patch
from fastapi import FastAPI

from transcript_functions.config import load_config
from transcript_functions.dependencies import ServiceContainer
from transcript_functions.logging import setup_logging
from transcript_functions.routes import transcripts_router

logger = logging.getLogger(__name__)

# FastAPI must be patched before any application is built.
patch(fastapi=True, grpc=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Builds the service container once per process and closes it at shutdown."""
    config = load_config()
    setup_logging(config.log_level)

    container = ServiceContainer.from_config(config)
    app.state.container = container
    logger.info("Transcript functions started")
    try:
        yield
    finally:
        await container.close()
        logger.info("Transcript functions stopped")


def create_app() -> FastAPI:
    """Creates the FastAPI application."""
    app = FastAPI(title="Transcript Functions", lifespan=lifespan)
    app.include_router(transcripts_router)
    return app


app = create_app()


def main():
    """Starts the HTTP server."""
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8080")),
        log_config=None,
    )


if __name__ == "__main__":
    main()
