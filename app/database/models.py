from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

STATUS_PROCESSING = "processing"
STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"


@dataclass
class DocumentRecord:
    """Represents a row from the documents table."""

    id: str
    user_id: str
    filename: str
    file_path: str
    processing_status: str
    original_text: str = ""
    translated_text: str = ""
    detected_language: str = "auto"
    parsed_data: Any = field(default_factory=list)
    error_message: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
