"""
FastAPI main application for the Booky book service.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request

from api.errors import register_exception_handlers
from api.routes import router
from store.database import BookStore
from utilities.config import config
from utilities.logger import bind_request_context, clear_request_context, setup_logging

# Setup logging
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=config.get_log_file_path(),
        debug=config.debug
    )
    logger.info("Starting Booky API")

    # A StoreConnectionError here aborts startup
    app.state.store = await BookStore.connect(
        config.mongodb_url,
        config.mongodb_database,
        config.mongodb_collection,
        **config.get_client_options()
    )

    yield

    logger.info("Shutting down Booky API")
    app.state.store.close()
    app.state.store = None


# Create FastAPI application
app = FastAPI(
    title="Booky API",
    description="Create, list, update and delete books stored in MongoDB.",
    version="1.0.0",
    redirect_slashes=False,
    lifespan=lifespan
)

register_exception_handlers(app)
app.include_router(router)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Bind the request method and path to every log line of the request."""
    bind_request_context(request.method, request.url.path)
    try:
        return await call_next(request)
    finally:
        clear_request_context()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower()
    )
