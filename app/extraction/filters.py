from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields
from typing import Any

from app.database.models import DocumentRecord
from app.extraction.models import Transaction

# criterion attribute -> transaction key
_CRITERIA_FIELDS = {
    "buyer": "buyer",
    "seller": "seller",
    "house_number": "house_no",
    "survey_number": "survey_no",
    "document_number": "document_no",
}


@dataclass(frozen=True)
class TransactionFilter:
    """Case-insensitive substring criteria over transaction fields.

    All set criteria must match (AND). Unset or empty criteria match anything.
    A set criterion never matches a missing or null field.
    """

    buyer: str | None = None
    seller: str | None = None
    house_number: str | None = None
    survey_number: str | None = None
    document_number: str | None = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "TransactionFilter":
        """Build from a mapping using either snake_case or camelCase keys."""
        kwargs: dict[str, str | None] = {}
        for item in fields(cls):
            camel = _to_camel(item.name)
            raw = values.get(item.name, values.get(camel))
            kwargs[item.name] = None if raw is None else str(raw)
        return cls(**kwargs)

    def active_criteria(self) -> dict[str, str]:
        return {
            key: getattr(self, attr).lower()
            for attr, key in _CRITERIA_FIELDS.items()
            if getattr(self, attr)
        }

    def is_empty(self) -> bool:
        return not self.active_criteria()

    def matches(self, transaction: Any) -> bool:
        criteria = self.active_criteria()
        if not criteria:
            return True
        if not isinstance(transaction, Mapping):
            return False
        for key, needle in criteria.items():
            value = transaction.get(key)
            if value is None or needle not in str(value).lower():
                return False
        return True

    def apply(self, transactions: Iterable[Transaction]) -> list[Transaction]:
        return [transaction for transaction in transactions if self.matches(transaction)]


def filter_documents(
    documents: Iterable[DocumentRecord],
    criteria: TransactionFilter,
) -> list[DocumentRecord]:
    """Keep documents with at least one matching transaction.

    Documents whose parsed data is not a list carry no usable records and are
    kept as-is.
    """
    if criteria.is_empty():
        return list(documents)
    return [
        document
        for document in documents
        if not isinstance(document.parsed_data, list)
        or any(criteria.matches(transaction) for transaction in document.parsed_data)
    ]


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)
