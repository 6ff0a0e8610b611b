from dataclasses import dataclass


@dataclass(frozen=True)
class ProcessingSummary:
    """What the caller of a successful processing run gets back."""

    document_id: str
    detected_language: str
    chunks_translated: int
    transaction_count: int
