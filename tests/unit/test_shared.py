"""
Unit tests for the shared/ utility modules.

Covers:
- shared.locale   (language_code, api_script_url)
- shared.logging  (redact_sensitive_fields)
"""

from __future__ import annotations

import pytest

from shared.locale import LANGUAGE_FILE_CODES, api_script_url, language_code
from shared.logging import redact_sensitive_fields

API_URL = "https://hcaptcha.com/1/api.js"


# ---------------------------------------------------------------------------
# shared.locale
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "language_file, expected",
    [
        ("french.inc", "fr"),
        ("english.inc", "en-GB"),
        ("english-usa.inc", "en"),
        ("portuguese_pt.inc", "pt-PT"),
        ("tchinese.inc", "zh-TW"),
        ("hebrew.inc", "iw"),
        ("belgianflemish.inc", ""),
        ("klingon.inc", ""),
        ("", ""),
        (None, ""),
    ],
)
def test_language_code(language_file, expected):
    assert language_code(language_file) == expected


def test_language_table_size():
    assert len(LANGUAGE_FILE_CODES) == 41


@pytest.mark.parametrize(
    "language_file, expected",
    [
        ("german.inc", f"{API_URL}?hl=de"),
        ("belgianflemish.inc", API_URL),
        ("unknown.inc", API_URL),
        (None, API_URL),
    ],
)
def test_api_script_url(language_file, expected):
    assert api_script_url(API_URL, language_file) == expected


# ---------------------------------------------------------------------------
# shared.logging
# ---------------------------------------------------------------------------


class TestRedaction:
    def test_secret_fields_redacted(self):
        event = redact_sensitive_fields(
            None,
            "info",
            {
                "event": "hcaptcha_siteverify_exchange",
                "secret": "0x123",
                "hcaptcha_secretkey": "0x456",
                "response_token": "abc",
            },
        )
        assert event["secret"] == "***REDACTED***"
        assert event["hcaptcha_secretkey"] == "***REDACTED***"
        assert event["response_token"] == "***REDACTED***"
        assert event["event"] == "hcaptcha_siteverify_exchange"

    def test_other_fields_untouched(self):
        event = redact_sensitive_fields(
            None, "info", {"event": "x", "page_id": 3, "site_key": "public"}
        )
        assert event["page_id"] == 3
        assert event["site_key"] == "public"

