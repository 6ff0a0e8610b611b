from typing import ClassVar

from app.language.base import BaseLanguageIdentifier
from app.language.lingua_adapter import LinguaIdentifier
from app.logging.logger import Log

AUTO = "auto"


class LanguageDetector:
    """Maps extracted text to a coarse ISO 639-1 code, or ``"auto"``."""

    ISO_639_3_TO_1: ClassVar[dict[str, str]] = {
        "tam": "ta",
        "hin": "hi",
        "eng": "en",
    }

    def __init__(
        self,
        identifier: BaseLanguageIdentifier | None = None,
        min_length: int = 20,
    ) -> None:
        self._min_length = min_length
        self._identifier = identifier or LinguaIdentifier(min_length=min_length)

    def detect(self, text: str | None) -> str:
        if not text or len(text.strip()) < self._min_length:
            return AUTO
        try:
            code3 = self._identifier.identify(text)
        except Exception as exc:
            Log.warning("Language identification failed", error=exc)
            return AUTO
        if code3 is None:
            return AUTO
        return self.ISO_639_3_TO_1.get(code3, AUTO)
