"""
FastAPI dependency providers.

All injectable dependencies are defined here as plain functions used with
FastAPI's Depends() system. The objects themselves are built once in the
app lifespan and stored on app.state.
"""

from __future__ import annotations

from fastapi import Request

from repositories.settings_repository import SettingsRepository
from services.captcha_service import CaptchaService
from services.widget_renderer import WidgetRenderer


def get_settings_repository(request: Request) -> SettingsRepository:
    return request.app.state.settings_repository


def get_captcha_service(request: Request) -> CaptchaService:
    return request.app.state.captcha_service


def get_widget_renderer(request: Request) -> WidgetRenderer:
    return request.app.state.widget_renderer
