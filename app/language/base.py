from abc import ABC, abstractmethod


class BaseLanguageIdentifier(ABC):
    """Contract for statistical language-identification adapters."""

    @abstractmethod
    def identify(self, text: str) -> str | None:
        """Return the lowercase ISO 639-3 code of ``text``, or None if undetermined."""
