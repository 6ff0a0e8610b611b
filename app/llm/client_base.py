from abc import ABC, abstractmethod


class BaseLlmClient(ABC):
    """Contract for generative-language clients used by translation and extraction."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Send a single free-text prompt and return the model's text response.

        Returns:
            The response text, stripped. Empty when the model produced no candidate.

        Raises:
            LlmRequestError: on a non-retryable (4xx) response.
            LlmTransientError: when retries are exhausted.
        """
