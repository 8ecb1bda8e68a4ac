"""
hCaptcha verification decision procedure.

captcha_applies() is shared by the widget and validation paths so a widget is
never rendered without being checked, nor checked without being rendered.

decide() runs the checks in a fixed order; every step short-circuits:

1. page does not include hCaptcha           → pass
2. alternate subscribe path, skip enabled   → pass
3. site/secret keys not entered             → pass (fail-open)
4. no response token submitted              → reject, "Please complete the hCaptcha"
5. siteverify call
6. success                                  → pass
7. otherwise                                → reject with the provider's error codes

Steps 1–4 never touch the network.
"""

from __future__ import annotations

from errors import CaptchaUnavailableError
from infrastructure.captcha.protocol import CaptchaProvider
from infrastructure.translator import PLEASE_COMPLETE, Translator
from schemas.models.captcha import (
    PageOptions,
    PluginCredentials,
    RequestContext,
    SiteVerifyResponse,
    VerificationOutcome,
)
from shared.logging import get_logger

log = get_logger(__name__)

UNSPECIFIED_ERROR = "unspecified error"


def captcha_applies(page_options: PageOptions, credentials: PluginCredentials) -> bool:
    return page_options.include and credentials.keys_configured


def rejection_message(result: SiteVerifyResponse) -> str:
    if result.error_codes is None:
        return UNSPECIFIED_ERROR
    return ", ".join(result.error_codes)


class CaptchaService:
    def __init__(
        self,
        provider: CaptchaProvider,
        translator: Translator,
        fail_open: bool = False,
    ) -> None:
        self._provider = provider
        self._translator = translator
        self._fail_open = fail_open

    async def decide(
        self,
        page_options: PageOptions,
        credentials: PluginCredentials,
        context: RequestContext,
    ) -> VerificationOutcome:
        """Decide whether a subscribe form submission passes hCaptcha.

        Raises:
            CaptchaUnavailableError: the provider could not be asked and the
                failure policy is fail-closed.
        """
        if not page_options.include:
            return VerificationOutcome.passed()

        if context.is_alternate_path and page_options.skip_for_alternate_submit_path:
            return VerificationOutcome.passed()

        if not credentials.keys_configured:
            return VerificationOutcome.passed()

        if not context.token:
            return VerificationOutcome.rejected(
                self._translator.translate(PLEASE_COMPLETE, context.language_file)
            )

        try:
            result = await self._provider.verify(credentials.secret_key, context.token)
        except CaptchaUnavailableError as e:
            if not self._fail_open:
                raise
            log.warning("hcaptcha_unavailable_fail_open", error=e.message)
            return VerificationOutcome.passed()

        if result.success:
            return VerificationOutcome.passed()

        return VerificationOutcome.rejected(rejection_message(result))
