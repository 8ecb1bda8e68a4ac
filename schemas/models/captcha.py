"""
hCaptcha domain models.

PluginCredentials   — global site/secret key pair (settings store `config`)
PageOptions         — per subscribe page options (settings store `subscribepage_data`)
RequestContext      — the submission being validated
VerificationOutcome — result of the decision procedure handed back to the host
SiteVerifyResponse  — parsed body of the provider's siteverify endpoint
"""

from __future__ import annotations

from typing import Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field

# Names of the persisted rows. Shared by the repository and the edit form.
SITE_KEY_SETTING = "hcaptcha_sitekey"
SECRET_KEY_SETTING = "hcaptcha_secretkey"

INCLUDE_OPTION = "hcaptcha_include"
NOT_ASUBSCRIBE_OPTION = "hcaptcha_not_asubscribe"
THEME_OPTION = "hcaptcha_theme"
SIZE_OPTION = "hcaptcha_size"

RESPONSE_FIELD = "h-captcha-response"

Theme = Literal["light", "dark"]
Size = Literal["normal", "compact"]


class PluginCredentials(BaseModel):
    """hCaptcha keys. Enforcement needs both of them."""

    model_config = ConfigDict(frozen=True)

    site_key: str = ""
    secret_key: str = ""

    @property
    def keys_configured(self) -> bool:
        return self.site_key != "" and self.secret_key != ""


class PageOptions(BaseModel):
    """hCaptcha options of one subscribe page.

    Defaults are the values shown the first time a page is edited.
    """

    model_config = ConfigDict(frozen=True)

    include: bool = False
    skip_for_alternate_submit_path: bool = True
    theme: Theme = "light"
    size: Size = "normal"

    def to_rows(self) -> dict[str, str]:
        """Serialise to the name → data rows stored for a page."""
        return {
            INCLUDE_OPTION: "1" if self.include else "0",
            NOT_ASUBSCRIBE_OPTION: "1" if self.skip_for_alternate_submit_path else "0",
            THEME_OPTION: self.theme,
            SIZE_OPTION: self.size,
        }

    @classmethod
    def from_rows(cls, rows: dict[str, str]) -> "PageOptions":
        """Build options from stored rows, using defaults for missing ones.

        Booleans are stored as "0"/"1"; only an empty value or "0" counts as
        false. Rows are shared with the host, so a theme or size outside the
        allowed values is ignored rather than rejected.
        """
        values: dict = {}
        if INCLUDE_OPTION in rows:
            values["include"] = _truthy(rows[INCLUDE_OPTION])
        if NOT_ASUBSCRIBE_OPTION in rows:
            values["skip_for_alternate_submit_path"] = _truthy(rows[NOT_ASUBSCRIBE_OPTION])
        if rows.get(THEME_OPTION) in get_args(Theme):
            values["theme"] = rows[THEME_OPTION]
        if rows.get(SIZE_OPTION) in get_args(Size):
            values["size"] = rows[SIZE_OPTION]
        return cls(**values)


class RequestContext(BaseModel):
    """The form submission being validated."""

    model_config = ConfigDict(frozen=True)

    # True when the host's alternate (non-interactive) subscribe route was used
    is_alternate_path: bool = False
    token: Optional[str] = None
    language_file: Optional[str] = None


class VerificationOutcome(BaseModel):
    """Whether the submission may proceed; message is empty on success."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    message: str = ""

    @classmethod
    def passed(cls) -> "VerificationOutcome":
        return cls(ok=True)

    @classmethod
    def rejected(cls, message: str) -> "VerificationOutcome":
        return cls(ok=False, message=message)


class SiteVerifyResponse(BaseModel):
    """Body of https://hcaptcha.com/siteverify.

    Only the fields the decision needs; anything else the provider sends
    (hostname, challenge_ts, credit, ...) is ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    success: bool = False
    error_codes: Optional[list[str]] = Field(default=None, alias="error-codes")


def _truthy(value: Optional[str]) -> bool:
    return value not in (None, "", "0")
