"""
FastAPI application factory.
create_app() is the single entry point for building the app.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import sentry_sdk
from fastapi import FastAPI
from pymongo.asynchronous.mongo_client import AsyncMongoClient

from config import AppSettings
from errors import register_error_handlers
from infrastructure.captcha.hcaptcha import HCaptchaProvider
from infrastructure.http_client import HttpClient
from infrastructure.translator import CatalogueTranslator
from plugin import DOCUMENTATION_URL, PLUGIN_DESCRIPTION, __version__
from repositories.settings_repository import SettingsRepository
from routes.hcaptcha_routes import router as hcaptcha_router
from routes.health_routes import router as health_router
from services.captcha_service import CaptchaService
from services.widget_renderer import WidgetRenderer
from shared.logging import setup_logging


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Create and return a fully configured FastAPI application."""
    if settings is None:
        settings = AppSettings()

    setup_logging(settings.logging)

    # Initialise Sentry before anything else so it captures startup errors
    if settings.sentry.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry.sentry_dsn,
            send_default_pii=settings.sentry.sentry_send_pii,
            traces_sample_rate=settings.sentry.sentry_traces_sample_rate,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # ── Startup ──────────────────────────────────────────────────────────
        mongo_client: AsyncMongoClient = AsyncMongoClient(settings.db.mongodb_uri)
        app.state.mongo_client = mongo_client
        app.state.db = mongo_client[settings.db.db_name]
        app.state.settings = settings

        repository = SettingsRepository(app.state.db)
        await repository.ensure_indexes()
        app.state.settings_repository = repository

        http_client = HttpClient(timeout=settings.hcaptcha.hcaptcha_timeout_seconds)
        translator = CatalogueTranslator()
        app.state.captcha_service = CaptchaService(
            HCaptchaProvider(http_client, settings.hcaptcha.hcaptcha_verify_url),
            translator,
            fail_open=settings.hcaptcha.fail_open,
        )
        app.state.widget_renderer = WidgetRenderer(
            translator, settings.hcaptcha.hcaptcha_api_url
        )

        yield

        # ── Shutdown ─────────────────────────────────────────────────────────
        await http_client.aclose()
        await mongo_client.close()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        description=f"{PLUGIN_DESCRIPTION}. See {DOCUMENTATION_URL}",
        docs_url=settings.docs_url,
        redoc_url=None,
        lifespan=lifespan,
    )

    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(hcaptcha_router)

    return app
