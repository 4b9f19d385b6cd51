# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI

from .. import __version__
from ..config import SettingsService
from ..constant import DOCS_ENABLED
from ..providers import ProviderService, ProviderStore
from ..providers.fetcher import ModelFetcher
from .routers import router

logger = logging.getLogger(__name__)


def create_app(
    store: Optional[ProviderStore] = None,
    fetcher: Optional[ModelFetcher] = None,
) -> FastAPI:
    """Build the API app around one :class:`ProviderStore`."""
    store = store or ProviderStore()

    app = FastAPI(
        title="LLM Desk",
        version=__version__,
        docs_url="/docs" if DOCS_ENABLED else None,
        redoc_url="/redoc" if DOCS_ENABLED else None,
        openapi_url="/openapi.json" if DOCS_ENABLED else None,
    )
    app.state.store = store
    app.state.provider_service = ProviderService(store)
    app.state.settings_service = SettingsService(store)
    app.state.fetcher = fetcher or ModelFetcher()
    app.include_router(router, prefix="/api")

    logger.info("LLM Desk API using data dir %s", store.data_dir)
    return app
