"""HTML fragments the host embeds in subscribe pages and the page editor."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, get_args

from jinja2 import Environment, FileSystemLoader, select_autoescape

from infrastructure.translator import PLEASE_COMPLETE, Translator
from schemas.models.captcha import PageOptions, PluginCredentials, Size, Theme
from services.captcha_service import captcha_applies
from shared.locale import api_script_url

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

_env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(["html"]),
    keep_trailing_newline=True,
)


class WidgetRenderer:
    def __init__(self, translator: Translator, api_url: str) -> None:
        self._translator = translator
        self._api_url = api_url

    def render_widget(
        self,
        page_options: PageOptions,
        credentials: PluginCredentials,
        language_file: Optional[str] = None,
    ) -> str:
        """Widget markup for a subscribe page, or "" when hCaptcha does not apply."""
        if not captcha_applies(page_options, credentials):
            return ""

        return _env.get_template("hcaptcha/widget.html").render(
            site_key=credentials.site_key,
            size=page_options.size,
            theme=page_options.theme,
            script_url=api_script_url(self._api_url, language_file),
            please_complete=self._translator.translate(PLEASE_COMPLETE, language_file),
        )

    def render_page_edit(self, page_options: PageOptions) -> str:
        return _env.get_template("hcaptcha/page_edit.html").render(
            options=page_options,
            themes=get_args(Theme),
            sizes=get_args(Size),
        )
