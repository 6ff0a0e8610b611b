from typing import Any, TypedDict

TRANSACTION_FIELDS = (
    "buyer",
    "seller",
    "house_no",
    "survey_no",
    "document_no",
    "date",
    "value",
)


class Transaction(TypedDict, total=False):
    """One real-estate transaction as returned by the model.

    Nothing is validated: keys may be missing and values may be null or of
    any JSON type.
    """

    buyer: Any
    seller: Any
    house_no: Any
    survey_no: Any
    document_no: Any
    date: Any
    value: Any
