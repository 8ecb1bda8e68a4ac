"""hCaptcha implementation of CaptchaProvider.

- secret key is passed per call: it lives in the settings store, not in env
- the timeout is enforced by HttpClient
- a rejected token is a normal SiteVerifyResponse; only transport errors,
  non-200 answers and unparseable bodies raise CaptchaUnavailableError
"""

from __future__ import annotations

import httpx
from pydantic import ValidationError as PydanticValidationError

from errors import CaptchaUnavailableError
from infrastructure.http_client import HttpClient
from schemas.models.captcha import SiteVerifyResponse
from shared.logging import get_logger

log = get_logger(__name__)


class HCaptchaProvider:
    def __init__(self, http_client: HttpClient, verify_url: str) -> None:
        self._http = http_client
        self._verify_url = verify_url

    async def verify(self, secret: str, token: str) -> SiteVerifyResponse:
        try:
            response = await self._http.post(
                self._verify_url,
                data={"secret": secret, "response": token},
            )
        except httpx.HTTPError as e:
            log.error(
                "hcaptcha_request_failed", error=str(e), error_type=type(e).__name__
            )
            raise CaptchaUnavailableError("hCaptcha verification is unavailable") from e

        log.debug(
            "hcaptcha_siteverify_exchange",
            url=self._verify_url,
            status_code=response.status_code,
            response_text=response.text[:500],
        )

        if response.status_code != 200:
            log.error(
                "hcaptcha_api_error",
                status_code=response.status_code,
                response_text=response.text[:200],
            )
            raise CaptchaUnavailableError(
                "hCaptcha verification is unavailable",
                details={"status_code": response.status_code},
            )

        try:
            result = SiteVerifyResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            log.error(
                "hcaptcha_malformed_response",
                error=str(e),
                response_text=response.text[:200],
            )
            raise CaptchaUnavailableError(
                "hCaptcha returned an unreadable response"
            ) from e

        if not result.success:
            log.warning("hcaptcha_verification_failed", error_codes=result.error_codes)
        return result
