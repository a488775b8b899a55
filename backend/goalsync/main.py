"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Receive, Scope, Send

from goalsync.config import Settings, get_settings
from goalsync.database import Database
from goalsync.exceptions import setup_exception_handlers
from goalsync.routes import auth, health, sync, users
from goalsync.routes.health import database_status

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings: Settings = app.state.settings
    database: Database = app.state.database

    logger.info("Starting goalsync API")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Backend URL: {settings.BACKEND_URL}")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    if not settings.SECRET_KEY:
        logger.error("SECRET_KEY is not set; session tokens cannot be issued")

    await database.connect()
    try:
        yield
    finally:
        await database.disconnect()
        logger.info("Shutting down goalsync API")


class OriginGuardMiddleware:
    """Reject cross-origin requests, preflights included, from origins outside the allow-list."""

    def __init__(self, app: ASGIApp, allowed_origins: list[str]):
        self.app = app
        self.allowed = set(allowed_origins)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            origin = Headers(scope=scope).get("origin")
            # Server-to-server requests carry no Origin header
            if origin and origin.rstrip("/") not in self.allowed:
                logger.warning(f"CORS blocked origin: {origin}")
                response = JSONResponse(status_code=403, content={"message": "Not allowed by CORS"})
                await response(scope, receive, send)
                return
        await self.app(scope, receive, send)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around an explicit settings instance."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="goalsync API",
        description="User accounts and learning-goal profile sync",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = Database(
        settings.database_url_str,
        echo=settings.DATABASE_ECHO,
        create_tables=settings.AUTO_CREATE_TABLES,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Outermost middleware is added last, so the guard also sees preflights
    app.add_middleware(OriginGuardMiddleware, allowed_origins=settings.cors_origins_list)

    setup_exception_handlers(app, hide_details=settings.is_production)

    # Include routers
    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(sync.router, prefix="/api/sync", tags=["Sync"])
    app.include_router(users.router, prefix="/api", tags=["Users"])

    @app.get("/")
    async def root(request: Request):
        """Root endpoint."""
        return {
            "message": "goalsync API running",
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": await database_status(request.app.state.database),
        }

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    settings = get_settings()
    uvicorn.run("goalsync.main:app", host="0.0.0.0", port=settings.PORT)
