from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from app.database.connection import get_connection
from app.database.models import (
    STATUS_COMPLETED,
    STATUS_FAILED,
    STATUS_PROCESSING,
    DocumentRecord,
)
from app.logging.logger import Log
from app.processor.exceptions import DocumentNotFoundError

_DOCUMENT_COLUMNS = """
    id, user_id, filename, file_path, processing_status, original_text,
    translated_text, detected_language, parsed_data, error_message,
    created_at, updated_at
"""


class DocumentsRepository:
    """Database operations for the documents table.

    The processing pipeline is the only writer of text, language, parsed data
    and status columns; rows are created by the upload flow elsewhere.
    """

    def mark_processing(self, document_id: str) -> None:
        """Set status to processing and clear any previous failure message.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET processing_status = %s, error_message = NULL,
                        updated_at = NOW()
                    WHERE id = %s
                    """,
                    (STATUS_PROCESSING, document_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()

    def mark_completed(
        self,
        document_id: str,
        *,
        original_text: str,
        translated_text: str,
        detected_language: str,
        parsed_data: list[Any],
    ) -> None:
        """Persist all processing outputs and the completed status in one update.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET original_text = %s,
                        translated_text = %s,
                        detected_language = %s,
                        parsed_data = %s,
                        processing_status = %s,
                        error_message = NULL,
                        updated_at = NOW()
                    WHERE id = %s
                    """,
                    (
                        original_text,
                        translated_text,
                        detected_language,
                        Jsonb(parsed_data),
                        STATUS_COMPLETED,
                        document_id,
                    ),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()

    def mark_failed(self, document_id: str, error: str) -> None:
        """Mark a document as failed. Text columns are left untouched."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET processing_status = %s, error_message = %s,
                        updated_at = NOW()
                    WHERE id = %s
                    """,
                    (STATUS_FAILED, error, document_id),
                )
                if cur.rowcount == 0:
                    Log.warning(
                        "No document row to mark as failed", document_id=document_id
                    )
            conn.commit()

    def find_by_id(self, document_id: str) -> DocumentRecord | None:
        """Find a document by ID, or None when no such row exists."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_DOCUMENT_COLUMNS} FROM documents WHERE id = %s",
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return self._to_record(row)

    def search_completed(
        self,
        user_id: str,
        query: str | None = None,
    ) -> list[DocumentRecord]:
        """Return a user's completed documents, newest first.

        When ``query`` is given, only documents whose filename or translated
        text contains it (case-insensitive) are returned.
        """
        sql = f"""
            SELECT {_DOCUMENT_COLUMNS}
            FROM documents
            WHERE user_id = %s
              AND processing_status = %s
        """
        params: list[Any] = [user_id, STATUS_COMPLETED]
        if query:
            sql += """
              AND (filename ILIKE %s OR translated_text ILIKE %s)
            """
            pattern = f"%{query}%"
            params.extend([pattern, pattern])
        sql += " ORDER BY created_at DESC"

        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(sql, tuple(params))
                rows = cur.fetchall()

        return [self._to_record(row) for row in rows]

    @staticmethod
    def _to_record(row: dict[str, Any]) -> DocumentRecord:
        return DocumentRecord(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            filename=row["filename"] or "",
            file_path=row["file_path"] or "",
            processing_status=row["processing_status"],
            original_text=row["original_text"] or "",
            translated_text=row["translated_text"] or "",
            detected_language=row["detected_language"] or "auto",
            parsed_data=row["parsed_data"] if row["parsed_data"] is not None else [],
            error_message=row["error_message"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
