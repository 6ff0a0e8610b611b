class LlmError(Exception):
    """Base exception for generative-language API failures."""


class LlmTransientError(LlmError):
    """Network errors, 5xx responses and unreadable envelopes. Retried."""


class LlmRequestError(LlmError):
    """4xx responses. The request itself is wrong, so it is never retried."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(body)
        self.status_code = status_code
        self.body = body
