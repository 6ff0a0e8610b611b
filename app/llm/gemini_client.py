"""Gemini generateContent client with classified retries.

Retry decision table:

    network / timeout error      -> retry
    5xx and other non-2xx        -> retry
    2xx with unreadable JSON     -> retry
    4xx                          -> fail immediately with the raw body

Retries use exponential backoff bounded by the configured min/max and stop
after ``max_retries + 1`` attempts, re-raising the last error.
"""

from typing import Any

import httpx
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.llm.client_base import BaseLlmClient
from app.llm.exceptions import LlmRequestError, LlmTransientError
from app.logging.logger import Log


class GeminiClient(BaseLlmClient):
    """Sends free-text prompts to the Gemini REST API."""

    def __init__(
        self,
        *,
        api_key: str,
        api_url: str,
        timeout_seconds: int = 60,
        max_retries: int = 2,
        min_backoff_seconds: float = 0.8,
        max_backoff_seconds: float = 2.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._api_url = api_url
        self._max_attempts = max(0, max_retries) + 1
        self._min_backoff = min_backoff_seconds
        self._max_backoff = max(min_backoff_seconds, max_backoff_seconds)
        self._client = http_client or httpx.Client(timeout=timeout_seconds)

    def generate(self, prompt: str) -> str:
        retrying = Retrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(
                multiplier=self._min_backoff,
                min=self._min_backoff,
                max=self._max_backoff,
            ),
            retry=retry_if_exception_type(LlmTransientError),
            before_sleep=self._log_retry,
            reraise=True,
        )
        return retrying(self._request, prompt)

    def _request(self, prompt: str) -> str:
        try:
            response = self._client.post(
                self._api_url,
                params={"key": self._api_key},
                json={"contents": [{"parts": [{"text": prompt}]}]},
            )
        except httpx.TransportError as exc:
            raise LlmTransientError(f"Gemini network error: {exc}") from exc

        if 400 <= response.status_code < 500:
            raise LlmRequestError(response.status_code, response.text)
        if not response.is_success:
            raise LlmTransientError(f"Gemini {response.status_code}: {response.text}")

        try:
            data = response.json()
        except ValueError as exc:
            raise LlmTransientError(f"Gemini returned invalid JSON: {exc}") from exc
        return self._candidate_text(data)

    @staticmethod
    def _candidate_text(data: Any) -> str:
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return ""
        return text.strip() if isinstance(text, str) else ""

    @staticmethod
    def _log_retry(state: RetryCallState) -> None:
        error = state.outcome.exception() if state.outcome else None
        delay = state.next_action.sleep if state.next_action else 0.0
        Log.warning(
            "Gemini call failed, retrying",
            attempt=state.attempt_number,
            delay_seconds=round(delay, 2),
            error=error,
        )
