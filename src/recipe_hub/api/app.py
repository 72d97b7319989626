"""FastAPI application factory."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from recipe_hub.api.admin import router as admin_router
from recipe_hub.api.auth import router as auth_router
from recipe_hub.api.errors import register_error_handlers
from recipe_hub.api.profile import router as profile_router
from recipe_hub.api.questions import router as questions_router
from recipe_hub.api.recipes import router as recipes_router
from recipe_hub.app_logging import configure_logging
from recipe_hub.config import parse_cors_origins
from recipe_hub.containers import AppContainer

API_VERSION = "1.0.0"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    settings = container.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        try:
            await asyncio.wait_for(
                state_container.check_store(),
                timeout=settings.store_connect_timeout_seconds,
            )
        except Exception:
            logger.exception("Could not reach the store; refusing to start")
            await state_container.close_resources()
            raise
        logger.info("Store reachable; environment=%s", settings.environment)
        yield
        await state_container.close_resources()

    app = FastAPI(title="Recipe Hub API", version=API_VERSION, lifespan=lifespan)
    app.state.container = container

    origins = parse_cors_origins(settings.cors_allow_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app, expose_details=not settings.is_production)

    app.include_router(auth_router)
    app.include_router(profile_router)
    app.include_router(recipes_router)
    app.include_router(questions_router)
    app.include_router(admin_router)

    @app.get("/")
    async def index() -> dict[str, object]:
        """List the API's route groups."""
        return {
            "success": True,
            "message": "Recipe Hub API is running",
            "version": API_VERSION,
            "endpoints": {
                "auth": "/api/auth",
                "profile": "/api/profile",
                "recipes": "/api/recipes",
                "questions": "/api/questions",
                "admin": "/api/admin",
                "health": "/api/health",
            },
        }

    @app.get("/api/health")
    async def health(request: Request) -> JSONResponse:
        """Report whether the store answers within the connect timeout."""
        state_container: AppContainer = request.app.state.container
        body: dict[str, object] = {
            "timestamp": datetime.now(tz=UTC).isoformat(),
            "environment": settings.environment,
        }
        try:
            await asyncio.wait_for(
                state_container.check_store(),
                timeout=settings.store_connect_timeout_seconds,
            )
        except Exception:
            logger.exception("Health check could not reach the store")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "success": False,
                    "message": "Store unavailable",
                    "store": "disconnected",
                    **body,
                },
            )
        return JSONResponse(
            content={
                "success": True,
                "message": "Server is running",
                "store": "connected",
                **body,
            }
        )

    return app
