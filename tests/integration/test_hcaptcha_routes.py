"""Integration tests for the /hcaptcha plugin hook endpoints."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from errors import CaptchaUnavailableError, register_error_handlers
from infrastructure.translator import CatalogueTranslator
from routes.hcaptcha_routes import router as hcaptcha_router
from schemas.models.captcha import PageOptions, PluginCredentials, SiteVerifyResponse
from services.captcha_service import CaptchaService
from services.widget_renderer import WidgetRenderer

KEYS = PluginCredentials(site_key="site-key", secret_key="secret-key")


def _build_test_app(
    options: PageOptions = PageOptions(include=True),
    credentials: PluginCredentials = KEYS,
    provider: AsyncMock = None,
    fail_open: bool = False,
):
    """
    Build a FastAPI app with a mocked settings repository and provider.
    Returns (app, repository, provider).
    """
    repository = AsyncMock()
    repository.get_page_options.return_value = options
    repository.get_credentials.return_value = credentials
    repository.register_setting.return_value = True

    if provider is None:
        provider = AsyncMock()
        provider.verify.return_value = SiteVerifyResponse(success=True)

    translator = CatalogueTranslator()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.settings_repository = repository
        app.state.captcha_service = CaptchaService(provider, translator, fail_open=fail_open)
        app.state.widget_renderer = WidgetRenderer(
            translator, "https://hcaptcha.com/1/api.js"
        )
        yield

    app = FastAPI(lifespan=lifespan)
    register_error_handlers(app)
    app.include_router(hcaptcha_router)
    return app, repository, provider


class TestActivate:
    def test_reports_created_settings(self):
        app, repository, _ = _build_test_app(credentials=PluginCredentials())
        with TestClient(app) as client:
            resp = client.post("/hcaptcha/activate")
        assert resp.status_code == 200
        body = resp.json()
        assert body["name"] == "hCaptcha Plugin"
        assert body["settings_created"] == ["hcaptcha_sitekey", "hcaptcha_secretkey"]
        assert body["keys_configured"] is False


class TestWidget:
    def test_renders_widget(self):
        app, repository, _ = _build_test_app()
        with TestClient(app) as client:
            resp = client.get(
                "/hcaptcha/pages/3/widget", params={"language_file": "french.inc"}
            )
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert 'data-sitekey="site-key"' in resp.text
        assert "api.js?hl=fr" in resp.text
        repository.get_page_options.assert_awaited_once_with(3)

    def test_empty_when_not_included(self):
        app, _, _ = _build_test_app(options=PageOptions(include=False))
        with TestClient(app) as client:
            resp = client.get("/hcaptcha/pages/3/widget")
        assert resp.status_code == 200
        assert resp.text == ""


class TestValidate:
    def test_passes_with_valid_token(self):
        app, _, provider = _build_test_app()
        with TestClient(app) as client:
            resp = client.post(
                "/hcaptcha/pages/1/validate", data={"h-captcha-response": "tok"}
            )
        assert resp.status_code == 200
        assert resp.json() == {"ok": True, "message": ""}
        provider.verify.assert_awaited_once_with("secret-key", "tok")

    def test_missing_token_rejected(self):
        app, _, provider = _build_test_app()
        with TestClient(app) as client:
            resp = client.post("/hcaptcha/pages/1/validate", data={})
        assert resp.json() == {"ok": False, "message": "Please complete the hCaptcha"}
        provider.verify.assert_not_awaited()

    def test_missing_token_message_translated(self):
        app, _, _ = _build_test_app()
        with TestClient(app) as client:
            resp = client.post(
                "/hcaptcha/pages/1/validate",
                data={"h-captcha-response": "", "language_file": "german.inc"},
            )
        assert resp.json()["message"] == "Bitte lösen Sie das hCaptcha"

    def test_provider_rejection(self):
        provider = AsyncMock()
        provider.verify.return_value = SiteVerifyResponse(
            success=False,
            error_codes=["invalid-input-response", "timeout-or-duplicate"],
        )
        app, _, _ = _build_test_app(provider=provider)
        with TestClient(app) as client:
            resp = client.post(
                "/hcaptcha/pages/1/validate", data={"h-captcha-response": "tok"}
            )
        assert resp.json() == {
            "ok": False,
            "message": "invalid-input-response, timeout-or-duplicate",
        }

    @pytest.mark.parametrize(
        "skip, expected_ok",
        [(True, True), (False, False)],
        ids=["skip_enabled", "skip_disabled"],
    )
    def test_asubscribe_path(self, skip, expected_ok):
        app, _, _ = _build_test_app(
            options=PageOptions(include=True, skip_for_alternate_submit_path=skip)
        )
        with TestClient(app) as client:
            resp = client.post("/hcaptcha/pages/1/validate?p=asubscribe", data={})
        assert resp.json()["ok"] is expected_ok

    def test_provider_unavailable_is_503(self):
        provider = AsyncMock()
        provider.verify.side_effect = CaptchaUnavailableError(
            "hCaptcha verification is unavailable"
        )
        app, _, _ = _build_test_app(provider=provider)
        with TestClient(app) as client:
            resp = client.post(
                "/hcaptcha/pages/1/validate", data={"h-captcha-response": "tok"}
            )
        assert resp.status_code == 503
        assert resp.json()["code"] == "captcha_unavailable"

    def test_provider_unavailable_fail_open(self):
        provider = AsyncMock()
        provider.verify.side_effect = CaptchaUnavailableError("down")
        app, _, _ = _build_test_app(provider=provider, fail_open=True)
        with TestClient(app) as client:
            resp = client.post(
                "/hcaptcha/pages/1/validate", data={"h-captcha-response": "tok"}
            )
        assert resp.status_code == 200
        assert resp.json()["ok"] is True


class TestPageEdit:
    def test_edit_form(self):
        app, _, _ = _build_test_app(options=PageOptions(theme="dark"))
        with TestClient(app) as client:
            resp = client.get("/hcaptcha/pages/4/edit")
        assert resp.status_code == 200
        assert '<option value="dark" selected="selected">dark</option>' in resp.text

    def test_save_replaces_options(self):
        app, repository, _ = _build_test_app()
        with TestClient(app) as client:
            resp = client.post(
                "/hcaptcha/pages/4/edit",
                data={
                    "hcaptcha_include": "1",
                    "hcaptcha_not_asubscribe": "0",
                    "hcaptcha_theme": "dark",
                    "hcaptcha_size": "compact",
                },
            )
        assert resp.status_code == 200
        repository.replace_page_options.assert_awaited_once_with(
            4,
            PageOptions(
                include=True,
                skip_for_alternate_submit_path=False,
                theme="dark",
                size="compact",
            ),
        )

    def test_save_rejects_unknown_theme(self):
        app, repository, _ = _build_test_app()
        with TestClient(app) as client:
            resp = client.post(
                "/hcaptcha/pages/4/edit", data={"hcaptcha_theme": "neon"}
            )
        assert resp.status_code == 400
        body = resp.json()
        assert body["code"] == "validation_error"
        assert body["field"] == "hcaptcha_theme"
        repository.replace_page_options.assert_not_awaited()


class TestSettings:
    def test_save_keys(self):
        app, repository, _ = _build_test_app()
        with TestClient(app) as client:
            resp = client.post(
                "/hcaptcha/settings",
                data={"hcaptcha_sitekey": "site-key", "hcaptcha_secretkey": "secret-key"},
            )
        assert resp.status_code == 200
        assert resp.json()["keys_configured"] is True
        assert repository.set_setting.await_count == 2
