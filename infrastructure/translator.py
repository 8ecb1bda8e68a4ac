"""Message translation for subscribe pages.

Translator protocol plus a catalogue-backed implementation keyed by the host's
language file name. A missing language or message falls back to the key, which
is the English text.
"""

from __future__ import annotations

from typing import Mapping, Optional, Protocol

PLEASE_COMPLETE = "Please complete the hCaptcha"

DEFAULT_CATALOGUE: dict[str, dict[str, str]] = {
    "french.inc": {PLEASE_COMPLETE: "Veuillez compléter le hCaptcha"},
    "german.inc": {PLEASE_COMPLETE: "Bitte lösen Sie das hCaptcha"},
    "swissgerman.inc": {PLEASE_COMPLETE: "Bitte lösen Sie das hCaptcha"},
    "dutch.inc": {PLEASE_COMPLETE: "Vul de hCaptcha in"},
    "spanish.inc": {PLEASE_COMPLETE: "Por favor, complete el hCaptcha"},
    "latinamerican.inc": {PLEASE_COMPLETE: "Por favor, complete el hCaptcha"},
    "italian.inc": {PLEASE_COMPLETE: "Completa l'hCaptcha"},
    "portuguese.inc": {PLEASE_COMPLETE: "Por favor, complete o hCaptcha"},
}


class Translator(Protocol):
    def translate(self, key: str, language_file: Optional[str] = None) -> str: ...


class CatalogueTranslator:
    def __init__(
        self, catalogue: Optional[Mapping[str, Mapping[str, str]]] = None
    ) -> None:
        self._catalogue = DEFAULT_CATALOGUE if catalogue is None else catalogue

    def translate(self, key: str, language_file: Optional[str] = None) -> str:
        if not language_file:
            return key
        return self._catalogue.get(language_file, {}).get(key, key)
