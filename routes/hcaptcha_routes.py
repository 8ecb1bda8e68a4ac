"""
hCaptcha plugin hooks exposed to the host.

POST /hcaptcha/activate                      — register key settings
GET  /hcaptcha/pages/{page_id}/widget        — widget markup (empty when not applicable)
POST /hcaptcha/pages/{page_id}/validate      — validate a subscribe form submission
GET  /hcaptcha/pages/{page_id}/edit          — option controls for the page editor
POST /hcaptcha/pages/{page_id}/edit          — save the page's options
POST /hcaptcha/settings                      — save the global site and secret keys

Validation answers 200 with {ok, message} for passed and rejected submissions
alike; 503 means the provider could not be asked (fail-closed policy).
"""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Form, Query
from fastapi.responses import HTMLResponse
from pydantic import ValidationError as PydanticValidationError

import plugin
from dependencies import (
    get_captcha_service,
    get_settings_repository,
    get_widget_renderer,
)
from errors import ValidationError
from repositories.settings_repository import SettingsRepository
from schemas.dto.requests.page_options import PageOptionsForm
from schemas.dto.responses.common import (
    ActivateResponse,
    ErrorResponse,
    ValidationResponse,
)
from schemas.models.captcha import RESPONSE_FIELD, RequestContext
from services.captcha_service import CaptchaService
from services.widget_renderer import WidgetRenderer

router = APIRouter(prefix="/hcaptcha", tags=["hcaptcha"])

Repository = Annotated[SettingsRepository, Depends(get_settings_repository)]
Renderer = Annotated[WidgetRenderer, Depends(get_widget_renderer)]
Service = Annotated[CaptchaService, Depends(get_captcha_service)]


@router.post("/activate", response_model=ActivateResponse)
async def activate(repository: Repository) -> ActivateResponse:
    created, credentials = await plugin.activate(repository)
    return ActivateResponse(
        name=plugin.PLUGIN_NAME,
        version=plugin.__version__,
        settings_created=created,
        keys_configured=credentials.keys_configured,
    )


@router.get("/pages/{page_id}/widget", response_class=HTMLResponse)
async def widget(
    page_id: int,
    repository: Repository,
    renderer: Renderer,
    language_file: Optional[str] = None,
) -> HTMLResponse:
    html = await plugin.render_widget(repository, renderer, page_id, language_file)
    return HTMLResponse(html)


@router.post(
    "/pages/{page_id}/validate",
    response_model=ValidationResponse,
    responses={503: {"model": ErrorResponse}},
)
async def validate(
    page_id: int,
    repository: Repository,
    service: Service,
    p: Annotated[Optional[str], Query()] = None,
    token: Annotated[Optional[str], Form(alias=RESPONSE_FIELD)] = None,
    language_file: Annotated[Optional[str], Form()] = None,
) -> ValidationResponse:
    context = RequestContext(
        is_alternate_path=plugin.is_alternate_path(p),
        token=token,
        language_file=language_file,
    )
    outcome = await plugin.validate_submission(repository, service, page_id, context)
    return ValidationResponse(ok=outcome.ok, message=outcome.message)


@router.get("/pages/{page_id}/edit", response_class=HTMLResponse)
async def edit_form(
    page_id: int, repository: Repository, renderer: Renderer
) -> HTMLResponse:
    return HTMLResponse(await plugin.render_page_edit(repository, renderer, page_id))


@router.post(
    "/pages/{page_id}/edit",
    response_model=ValidationResponse,
    responses={400: {"model": ErrorResponse}},
)
async def save_edit(
    page_id: int,
    repository: Repository,
    hcaptcha_include: Annotated[str, Form()] = "0",
    hcaptcha_not_asubscribe: Annotated[str, Form()] = "0",
    hcaptcha_theme: Annotated[str, Form()] = "light",
    hcaptcha_size: Annotated[str, Form()] = "normal",
) -> ValidationResponse:
    try:
        form = PageOptionsForm(
            hcaptcha_include=hcaptcha_include,
            hcaptcha_not_asubscribe=hcaptcha_not_asubscribe,
            hcaptcha_theme=hcaptcha_theme,
            hcaptcha_size=hcaptcha_size,
        )
    except PydanticValidationError as e:
        first = e.errors()[0]
        raise ValidationError(
            "Invalid hCaptcha option",
            field=str(first["loc"][0]) if first.get("loc") else None,
            details=first.get("msg"),
        ) from e

    await plugin.save_page_edit(repository, page_id, form)
    return ValidationResponse(ok=True)


@router.post("/settings", response_model=ActivateResponse)
async def save_settings(
    repository: Repository,
    hcaptcha_sitekey: Annotated[str, Form()] = "",
    hcaptcha_secretkey: Annotated[str, Form()] = "",
) -> ActivateResponse:
    credentials = await plugin.save_credentials(
        repository, hcaptcha_sitekey, hcaptcha_secretkey
    )
    return ActivateResponse(
        name=plugin.PLUGIN_NAME,
        version=plugin.__version__,
        settings_created=[],
        keys_configured=credentials.keys_configured,
    )
