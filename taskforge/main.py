"""
FastAPI application entry point.

Configures logging, middleware, routes, and exception handlers.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskforge.core.config import settings
from taskforge.core.dependencies import close_redis
from taskforge.core.exceptions import register_exception_handlers
from taskforge.core.logging_config import RequestLoggingMiddleware, configure_logging
from taskforge.routers import auth, companies, health, projects, tasks, users
from taskforge.routers.lookups import priorities_router, statuses_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging(settings.LOG_LEVEL)
    logger.info("Starting TaskForge API in %s mode", settings.ENVIRONMENT)
    yield
    await close_redis()
    logger.info("Shutting down TaskForge API")


app = FastAPI(
    title="TaskForge API",
    description="Task, project and company management",
    version="1.0.0",
    docs_url="/api/docs" if settings.DOCS_ENABLED else None,
    redoc_url="/api/redoc" if settings.DOCS_ENABLED else None,
    openapi_url="/api/openapi.json" if settings.DOCS_ENABLED else None,
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)

register_exception_handlers(app)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    return {
        "message": "TaskForge API",
        "version": "1.0.0",
        "docs": "/api/docs" if settings.DOCS_ENABLED else "disabled",
    }


app.include_router(health.router, tags=["Health"])
app.include_router(auth.router, prefix="/api/v1/auth", tags=["Auth"])
app.include_router(users.router, prefix="/api/v1/users", tags=["Users"])
app.include_router(companies.router, prefix="/api/v1/companies", tags=["Companies"])
app.include_router(projects.router, prefix="/api/v1/projects", tags=["Projects"])
app.include_router(tasks.router, prefix="/api/v1/tasks", tags=["Tasks"])
app.include_router(statuses_router, prefix="/api/v1/statuses", tags=["Statuses"])
app.include_router(priorities_router, prefix="/api/v1/priorities", tags=["Priorities"])
