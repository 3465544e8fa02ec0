"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Builds the document store and
identity verifier once and keeps them on app.state; dependencies read them
from there. No module-level clients.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from pindown.core.config import get_settings
from pindown.infrastructure.firebase.client import (
    build_document_store,
    build_identity_verifier,
)
from pindown.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, document store, identity verifier. Clients already
    placed on app.state (e.g. by tests) are left as they are.
    Shutdown: close the store's HTTP pool.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    if getattr(app.state, "document_store", None) is None:
        app.state.document_store = build_document_store(settings)
    if getattr(app.state, "identity_verifier", None) is None:
        app.state.identity_verifier = build_identity_verifier(settings)
    if settings.dev_auth_bypass:
        logger.warning(
            "DEV_AUTH_BYPASS is on: every request runs as %s", settings.dev_user_id
        )
    logger.info("%s %s started (%s)", settings.app_name, settings.app_version, settings.environment)

    yield

    # ---- Shutdown ----
    store = getattr(app.state, "document_store", None)
    if store is not None and hasattr(store, "aclose"):
        await store.aclose()
        logger.info("Document store HTTP client closed")
    app.state.document_store = None
    app.state.identity_verifier = None
