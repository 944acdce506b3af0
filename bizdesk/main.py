"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
Settings are loaded inside create_app() so tests can set env (and clear the
get_settings cache) before calling it.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from bizdesk.api import pages
from bizdesk.api.v1 import api_router
from bizdesk.core.config import get_settings
from bizdesk.core.exception_handlers import register_exception_handlers
from bizdesk.core.lifespan import create_lifespan
from bizdesk.core.limiter import limiter
from bizdesk.middleware import RequestIDMiddleware
from bizdesk.shared.telemetry import setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # First added = innermost: CORS runs inside the request-ID wrapper.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api/v1")
    app.include_router(pages.router)

    return app


app = create_app()
