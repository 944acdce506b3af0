"""Application lifespan: Firebase backend startup and shutdown.

The backend is created here and stored on app.state.firebase; request
handlers receive it through bizdesk.api.v1.dependencies.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from bizdesk.core.config import get_settings
from bizdesk.infrastructure.firebase import close_firebase, init_firebase

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize Firebase on startup; close its HTTP pool on shutdown."""
    settings = get_settings()
    app.state.firebase = init_firebase(settings)
    logger.info("%s started (backend target: %s)", settings.app_name, settings.backend_target)

    yield

    app.state.firebase = None
    await close_firebase()
