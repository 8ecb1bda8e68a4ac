"""CaptchaProvider protocol — services depend on this, not the concrete implementation."""

from typing import Protocol

from schemas.models.captcha import SiteVerifyResponse


class CaptchaProvider(Protocol):
    async def verify(self, secret: str, token: str) -> SiteVerifyResponse: ...
