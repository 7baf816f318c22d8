"""
FastAPI application factory.

Creates and configures the FastAPI application instance.  The lifespan
builds the process-wide record store, hydrates it and wires the LLM
client; both can be injected instead (tests do).
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.exceptions import DomainRangeError, InvalidRequestError
from app.core.logging import setup_logging
from app.db.repositories.records import RecordRepository
from app.store.base import PersistentKeyValueStore

logger = logging.getLogger(__name__)


def _build_default_store() -> PersistentKeyValueStore:
    from app.db.init_db import init_db
    from app.db.session import engine
    from app.store.sql import SqlStorageBackend

    init_db(engine)
    return PersistentKeyValueStore(SqlStorageBackend(engine), prefix=settings.STORE_KEY_PREFIX)


def create_app(store: Optional[PersistentKeyValueStore] = None, llm_client: Any = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.LOG_LEVEL)

        repository = RecordRepository(store if store is not None else _build_default_store())
        repository.hydrate()
        app.state.repository = repository
        logger.info("Record store hydrated")

        if llm_client is not None:
            app.state.llm_client = llm_client
        else:
            from app.llm.client import create_llm_client
            app.state.llm_client = create_llm_client(settings)

        yield

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Local-first strength training tracker with Wilks scoring and rank tiers.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan)

    @app.exception_handler(DomainRangeError)
    async def domain_range_handler(request: Request, exc: DomainRangeError):
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": str(exc)})

    @app.exception_handler(InvalidRequestError)
    async def invalid_request_handler(request: Request, exc: InvalidRequestError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    # Include API router
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        """Root endpoint - health check."""
        return {
            "message": "Big3 Trainer API",
            "version": settings.VERSION,
            "status": "healthy"
        }

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint for monitoring."""
        repository = getattr(request.app.state, "repository", None)
        return {
            "status": "healthy",
            "service": "big3-trainer-api",
            "version": settings.VERSION,
            "hydrated": bool(repository and repository.is_hydrated),
        }

    @app.get("/info")
    async def info():
        return {
            "project name": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "authors": settings.AUTHORS,
            "project url": settings.PROJECT_URL
        }

    return app


app = create_app()
