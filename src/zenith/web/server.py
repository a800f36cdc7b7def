from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zenith.app import App
from zenith.config import Config
from zenith.errors import UserError
from zenith.web.error_handlers import general_exception_handler, user_error_handler
from zenith.web.middleware import SessionRedirectMiddleware
from zenith.web.openapi import set_custom_openapi
from zenith.web.routers import (
    auth_router,
    dashboard_router,
    habits_router,
    journal_router,
    meditations_router,
    profile_router,
    progress_router,
    recommendation_router,
    session_router,
)


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        async with app_instance.lifespan():
            yield

    app = FastAPI(title="Zenith API", lifespan=lifespan)
    app.state.app = app_instance
    app.state.config = config

    app.add_middleware(SessionRedirectMiddleware, secret_key=config.session_secret_key, algorithms=[config.session_algorithm])

    # Added last so it wraps the session middleware and answers preflight requests
    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(auth_router)
    app.include_router(session_router)
    app.include_router(dashboard_router)
    app.include_router(habits_router)
    app.include_router(journal_router)
    app.include_router(meditations_router)
    app.include_router(progress_router)
    app.include_router(profile_router)
    app.include_router(recommendation_router)

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
