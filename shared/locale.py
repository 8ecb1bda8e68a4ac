"""
Subscribe page language file → hCaptcha language code.

The host names a page's language by its language file (e.g. "french.inc").
hCaptcha takes an ``hl`` code on the api.js URL. An empty code means no
``hl`` parameter is added and hCaptcha picks the browser language.
"""

from __future__ import annotations

from typing import Optional

LANGUAGE_FILE_CODES: dict[str, str] = {
    "afrikaans.inc": "af",
    "arabic.inc": "ar",
    "belgianflemish.inc": "",
    "bosnian.inc": "bs",
    "bulgarian.inc": "bg",
    "catalan.inc": "ca",
    "croatian.inc": "hr",
    "czech.inc": "cs",
    "danish.inc": "da",
    "dutch.inc": "nl",
    "english-gaelic.inc": "en-GB",
    "english.inc": "en-GB",
    "english-usa.inc": "en",
    "estonian.inc": "et",
    "finnish.inc": "fi",
    "french.inc": "fr",
    "german.inc": "de",
    "greek.inc": "el",
    "hebrew.inc": "iw",
    "hungarian.inc": "hu",
    "indonesian.inc": "id",
    "italian.inc": "it",
    "japanese.inc": "ja",
    "latinamerican.inc": "es",
    "norwegian.inc": "no",
    "persian.inc": "fa",
    "polish.inc": "pl",
    "portuguese.inc": "pt",
    "portuguese_pt.inc": "pt-PT",
    "romanian.inc": "ro",
    "russian.inc": "ru",
    "serbian.inc": "sr",
    "slovenian.inc": "sl",
    "spanish.inc": "es",
    "swedish.inc": "sv",
    "swissgerman.inc": "de-CH",
    "tchinese.inc": "zh-TW",
    "turkish.inc": "tr",
    "ukrainian.inc": "uk",
    "usa.inc": "en",
    "vietnamese.inc": "vi",
}


def language_code(language_file: Optional[str]) -> str:
    """Return the hCaptcha language code for a language file, or "" if unknown."""
    if not language_file:
        return ""
    return LANGUAGE_FILE_CODES.get(language_file, "")


def api_script_url(api_url: str, language_file: Optional[str]) -> str:
    """Widget script URL, with ``?hl=<code>`` when the language maps to a code."""
    code = language_code(language_file)
    if code:
        return f"{api_url}?hl={code}"
    return api_url
