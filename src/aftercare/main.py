"""FastAPI application factory.

create_app() returns a configured FastAPI instance. Shared resources
(database engine, session factory, token service, login timing shield,
brochure catalog) are built here and hung off app.state, where the
request dependencies find them. Lifespan only logs and disposes the
engine on shutdown.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from aftercare import __version__
from aftercare.api import build_api_router
from aftercare.api.health import router as health_router
from aftercare.auth.jwt import TokenService
from aftercare.auth.password import TimingShield
from aftercare.config import Settings
from aftercare.config import settings as default_settings
from aftercare.db.engine import build_engine, build_session_factory
from aftercare.errors import register_exception_handlers
from aftercare.middleware.request_id import RequestIdMiddleware
from aftercare.middleware.security import SecurityHeadersMiddleware
from aftercare.services.brochure_service import BrochureCatalog

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Anything before `yield` runs at startup, after `yield` at shutdown."""
    settings: Settings = app.state.settings
    logger.info(
        "aftercare.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
        brochure_items=app.state.catalog.total_items,
    )

    yield

    logger.info("aftercare.shutdown")
    await app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application."""
    settings = settings or default_settings

    app = FastAPI(
        title="Aftercare API",
        description="Post-operative recovery backend: brochure, progress and symptom tracker",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.tokens = TokenService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_days=settings.access_token_expire_days,
    )
    app.state.timing_shield = TimingShield(settings.bcrypt_rounds)
    app.state.catalog = BrochureCatalog()

    register_exception_handlers(app)

    # ── Middleware stack ──────────────────────────────────────
    # Starlette runs middleware in reverse order of registration.
    # Request flow: CORS → Security → RequestId → handler
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, api_prefix=settings.api_prefix)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.include_router(health_router, tags=["health"])
    app.include_router(build_api_router(settings.api_prefix))

    return app


# Default app instance (used by uvicorn: aftercare.main:app)
app = create_app()
