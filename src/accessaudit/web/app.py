"""FastAPI application factory for the AccessAudit web API."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from accessaudit import __version__
from accessaudit.audit.manager import AuditManager
from accessaudit.config import AccessAuditConfig
from accessaudit.fetcher import MarkupFetcher, default_fetcher
from accessaudit.scans.manager import ScanManager
from accessaudit.storage.db import get_db
from accessaudit.storage.repos import AuditRepo, ScanRepo

logger = logging.getLogger(__name__)


def create_app(
    config: AccessAuditConfig | None = None,
    fetcher: MarkupFetcher | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    The database and managers are created in the lifespan so they live on
    the server's event loop.
    """
    config = config or AccessAuditConfig.load()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        db = await get_db(config.db_path)
        markup_fetcher = fetcher or default_fetcher(
            timeout=config.fetch_timeout,
            max_bytes=config.max_markup_bytes,
            user_agent=config.user_agent,
        )
        scan_repo = ScanRepo(db)
        app.state.db = db
        app.state.scan_manager = ScanManager(scan_repo, markup_fetcher)
        app.state.audit_manager = AuditManager(scan_repo, AuditRepo(db))
        logger.info("Database opened at %s", config.db_path)
        try:
            yield
        finally:
            await app.state.scan_manager.drain()
            close = getattr(markup_fetcher, "close", None)
            if close is not None:
                await close()
            await db.close()
            logger.info("Database closed")

    app = FastAPI(
        title="AccessAudit",
        version=__version__,
        docs_url="/api/docs",
        lifespan=lifespan,
    )
    app.state.config = config

    from accessaudit.web.api.audits import router as audits_router
    from accessaudit.web.api.catalog import router as catalog_router
    from accessaudit.web.api.scans import router as scans_router

    app.include_router(scans_router, prefix="/api")
    app.include_router(catalog_router, prefix="/api")
    app.include_router(audits_router, prefix="/api")

    return app
