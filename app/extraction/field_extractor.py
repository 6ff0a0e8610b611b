"""Structured transaction extraction from translated document text."""

import json
import re

from app.extraction.exceptions import TransactionParseError
from app.extraction.models import TRANSACTION_FIELDS, Transaction
from app.llm.client_base import BaseLlmClient
from app.logging.logger import Log

_FIELD_HINTS = {"date": "date (YYYY-MM-DD)"}
_FIELD_LIST = ", ".join(_FIELD_HINTS.get(field, field) for field in TRANSACTION_FIELDS)

_PROMPT_TEMPLATE = """Extract real estate transaction data as a JSON array.
Each element is an object with the fields: {fields}.
Use null for fields that are not present. Return valid JSON only, with no explanation.
---
{text}"""

_LEADING_FENCE = re.compile(r"^\s*```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```\s*$")
_RESPONSE_EXCERPT_CHARS = 500


def strip_code_fences(raw: str) -> str:
    cleaned = _LEADING_FENCE.sub("", raw, count=1)
    return _TRAILING_FENCE.sub("", cleaned, count=1).strip()


def parse_transactions(raw: str) -> list[Transaction]:
    """Parse a model response into a list of transaction records.

    Raises:
        TransactionParseError: if the response is not a JSON array.
    """
    cleaned = strip_code_fences(raw)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise TransactionParseError(f"Invalid JSON response: {exc}") from exc
    if not isinstance(parsed, list):
        raise TransactionParseError(
            f"JSON response must be an array, got {type(parsed).__name__}"
        )
    return parsed


class FieldExtractor:
    """Asks the model for transaction records and parses them, failing soft."""

    def __init__(self, client: BaseLlmClient) -> None:
        self._client = client

    def extract(self, translated_text: str) -> list[Transaction]:
        """Return extracted transactions, or an empty list if the output is unusable.

        Client errors (exhausted retries, 4xx) propagate; only parsing is soft.
        """
        prompt = _PROMPT_TEMPLATE.format(fields=_FIELD_LIST, text=translated_text)
        Log.debug(f"Field extraction prompt:\n{prompt}")

        raw_response = self._client.generate(prompt)
        Log.debug(f"Field extraction raw response:\n{raw_response}")

        try:
            transactions = parse_transactions(raw_response)
        except TransactionParseError as exc:
            Log.error(
                f"Field extraction failed: {exc}",
                response_excerpt=raw_response[:_RESPONSE_EXCERPT_CHARS],
            )
            return []

        Log.info(f"Field extraction complete: {len(transactions)} transactions")
        return transactions
