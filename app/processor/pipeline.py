from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from app.extraction.filters import TransactionFilter
from app.extraction.models import Transaction
from app.language.detector import AUTO


@dataclass(slots=True)
class PipelineContext:
    document_id: str
    storage_path: str
    criteria: TransactionFilter = field(default_factory=TransactionFilter)
    raw_bytes: bytes = b""
    original_text: str = ""
    detected_language: str = AUTO
    translated_text: str = ""
    chunk_count: int = 0
    transactions: list[Transaction] = field(default_factory=list)
    filtered_transactions: list[Transaction] = field(default_factory=list)
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
