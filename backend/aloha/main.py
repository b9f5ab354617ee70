"""
Aloha Admin - FastAPI Application Entry Point

This module initializes the FastAPI application with middleware,
routes, error handlers and lifecycle event handlers.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from aloha.core.config import settings
from aloha.core.database import close_db, init_db
from aloha.core.exceptions import AlohaError
from aloha.core.logging_config import setup_logging
from aloha.core.session_store import SessionStore
from aloha.middleware.logging import LoggingMiddleware
from aloha.middleware.request_id import RequestIDMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
        - Set up logging
        - Initialize database
        - Connect the session store

    Shutdown:
        - Close the session store and database connections
    """
    setup_logging(level=settings.log_level, json_format=settings.log_json)
    await init_db()
    app.state.session_store = SessionStore.from_url(
        settings.redis_url, settings.session_ttl_seconds
    )

    yield

    await app.state.session_store.close()
    await close_db()


app = FastAPI(
    title=settings.project_name,
    version="0.1.0",
    description="Administrative backend for users, groups, permissions and content",
    openapi_url=f"{settings.api_prefix}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


@app.exception_handler(AlohaError)
async def aloha_error_handler(request: Request, exc: AlohaError) -> JSONResponse:
    """Render every request-scoped failure as ``{"code": ..., "error": ...}``."""
    logger.info(
        f"Request rejected: {exc.message}",
        extra={"path": request.url.path, "status_code": exc.status_code},
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Middleware runs in reverse order of registration
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


from aloha.api.v1 import (  # noqa: E402
    auth,
    contents,
    group_permissions,
    health,
    permissions,
    user_groups,
    user_permissions,
    users,
)

app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
app.include_router(auth.router, prefix=settings.collection_path("auth"), tags=["auth"])
app.include_router(users.router, prefix=settings.collection_path("users"), tags=["users"])
app.include_router(
    user_groups.router, prefix=settings.collection_path("user_groups"), tags=["user_groups"]
)
app.include_router(
    permissions.router, prefix=settings.collection_path("permissions"), tags=["permissions"]
)
app.include_router(
    group_permissions.router,
    prefix=settings.collection_path("group_permissions"),
    tags=["group_permissions"],
)
app.include_router(
    user_permissions.router,
    prefix=settings.collection_path("user_permissions"),
    tags=["user_permissions"],
)
app.include_router(
    contents.router, prefix=settings.collection_path("contents"), tags=["contents"]
)


@app.get("/")
async def root():
    """Basic API information."""
    return {
        "message": "Aloha Admin API",
        "version": "0.1.0",
        "docs": "/docs",
    }


def serve() -> None:
    """Run the API with uvicorn (``aloha-admin`` console script)."""
    import uvicorn

    uvicorn.run(
        "aloha.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "local",
    )


if __name__ == "__main__":
    serve()
