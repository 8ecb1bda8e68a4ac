"""
hCaptcha plugin lifecycle hooks.

The host invokes these at fixed points of the subscribe page lifecycle:

activate            — plugin enabled: register the global key settings
render_widget       — subscribe page displayed: widget markup (or "")
validate_submission — subscribe page submitted: VerificationOutcome
render_page_edit    — admin edits a subscribe page: option controls
save_page_edit      — admin saves a subscribe page: replace the option rows
save_credentials    — admin saves the global site and secret keys

Every hook takes its collaborators explicitly; nothing is cached between
calls, so saved keys take effect on the next request.
"""

from __future__ import annotations

from typing import Optional

from repositories.settings_repository import SettingsRepository
from schemas.dto.requests.page_options import PageOptionsForm
from schemas.models.captcha import (
    SECRET_KEY_SETTING,
    SITE_KEY_SETTING,
    PageOptions,
    PluginCredentials,
    RequestContext,
    VerificationOutcome,
)
from services.captcha_service import CaptchaService
from services.widget_renderer import WidgetRenderer
from shared.logging import get_logger

log = get_logger(__name__)

__version__ = "1.0.0"

PLUGIN_NAME = "hCaptcha Plugin"
PLUGIN_DESCRIPTION = "Adds an hCaptcha field to subscribe forms"
DOCUMENTATION_URL = "https://resources.phplist.com/plugin/hcaptcha"

# The host's subscribe route that is called programmatically
ALTERNATE_SUBSCRIBE_PAGE = "asubscribe"

SETTINGS: dict[str, dict] = {
    SITE_KEY_SETTING: {
        "description": "hCaptcha site key",
        "type": "text",
        "value": "",
        "allowempty": False,
        "category": "hCaptcha",
    },
    SECRET_KEY_SETTING: {
        "description": "hCaptcha secret key",
        "type": "text",
        "value": "",
        "allowempty": False,
        "category": "hCaptcha",
    },
}


def is_alternate_path(page: Optional[str]) -> bool:
    return page == ALTERNATE_SUBSCRIBE_PAGE


async def activate(
    repository: SettingsRepository,
) -> tuple[list[str], PluginCredentials]:
    """Register the key settings and return (created setting names, credentials)."""
    created = []
    for item, definition in SETTINGS.items():
        if await repository.register_setting(item, **definition):
            created.append(item)

    credentials = await repository.get_credentials()
    log.info(
        "hcaptcha_plugin_activated",
        settings_created=created,
        keys_configured=credentials.keys_configured,
    )
    return created, credentials


async def render_widget(
    repository: SettingsRepository,
    renderer: WidgetRenderer,
    page_id: int,
    language_file: Optional[str] = None,
) -> str:
    return renderer.render_widget(
        await repository.get_page_options(page_id),
        await repository.get_credentials(),
        language_file,
    )


async def validate_submission(
    repository: SettingsRepository,
    service: CaptchaService,
    page_id: int,
    context: RequestContext,
) -> VerificationOutcome:
    outcome = await service.decide(
        await repository.get_page_options(page_id),
        await repository.get_credentials(),
        context,
    )
    if not outcome.ok:
        log.info(
            "hcaptcha_submission_rejected",
            page_id=page_id,
            reason=outcome.message,
        )
    return outcome


async def render_page_edit(
    repository: SettingsRepository, renderer: WidgetRenderer, page_id: int
) -> str:
    return renderer.render_page_edit(await repository.get_page_options(page_id))


async def save_page_edit(
    repository: SettingsRepository, page_id: int, form: PageOptionsForm
) -> PageOptions:
    options = form.to_page_options()
    await repository.replace_page_options(page_id, options)
    return options


async def save_credentials(
    repository: SettingsRepository, site_key: str, secret_key: str
) -> PluginCredentials:
    await repository.set_setting(SITE_KEY_SETTING, site_key.strip())
    await repository.set_setting(SECRET_KEY_SETTING, secret_key.strip())
    credentials = await repository.get_credentials()
    log.info("hcaptcha_keys_saved", keys_configured=credentials.keys_configured)
    return credentials
