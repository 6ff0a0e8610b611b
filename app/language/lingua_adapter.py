import threading

from lingua import LanguageDetector, LanguageDetectorBuilder

from app.language.base import BaseLanguageIdentifier


class LinguaIdentifier(BaseLanguageIdentifier):
    """Language identification backed by lingua.

    The underlying detector is built once, on first use, and shared between
    request threads.
    """

    def __init__(self, min_length: int = 20) -> None:
        self._min_length = min_length
        self._detector: LanguageDetector | None = None
        self._build_lock = threading.Lock()

    def identify(self, text: str) -> str | None:
        if len(text.strip()) < self._min_length:
            return None
        language = self._get_detector().detect_language_of(text)
        if language is None:
            return None
        return language.iso_code_639_3.name.lower()

    def _get_detector(self) -> LanguageDetector:
        if self._detector is None:
            with self._build_lock:
                if self._detector is None:
                    self._detector = LanguageDetectorBuilder.from_all_languages().build()
        return self._detector
