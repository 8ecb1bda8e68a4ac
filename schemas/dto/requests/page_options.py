"""
Request DTOs for the hCaptcha endpoints.

PageOptionsForm — POST /hcaptcha/pages/{page_id}/edit  (form fields)

Field names are the host's form field names, which are also the stored row
names. Checkboxes submit "0"/"1".
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.models.captcha import PageOptions, Size, Theme


class PageOptionsForm(BaseModel):
    """Submitted hCaptcha controls of the subscribe page editor."""

    model_config = ConfigDict(populate_by_name=True)

    include: bool = Field(default=False, alias="hcaptcha_include")
    not_asubscribe: bool = Field(default=True, alias="hcaptcha_not_asubscribe")
    theme: Theme = Field(default="light", alias="hcaptcha_theme")
    size: Size = Field(default="normal", alias="hcaptcha_size")

    @field_validator("include", "not_asubscribe", mode="before")
    @classmethod
    def _checkbox(cls, v):
        # An unchecked box with no hidden fallback arrives as an empty string
        if v is None or v == "":
            return False
        return v

    def to_page_options(self) -> PageOptions:
        return PageOptions(
            include=self.include,
            skip_for_alternate_submit_path=self.not_asubscribe,
            theme=self.theme,
            size=self.size,
        )
