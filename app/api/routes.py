from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.schemas import HealthResponse, ProcessDocumentRequest, ProcessDocumentResponse
from app.database.repositories.documents_repository import DocumentsRepository
from app.extraction.filters import TransactionFilter, filter_documents
from app.logging.logger import Log
from app.processor.processor import Processor

router = APIRouter()

# path -> error returned when the request cannot be parsed
_VALIDATION_ERRORS = {
    "/process-document": "documentId and filePath required",
    "/search-documents": "userId is required",
}


def get_processor(request: Request) -> Processor:
    return request.app.state.processor


def get_documents_repository(request: Request) -> DocumentsRepository:
    return request.app.state.doc_repo


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/process-document", response_model=None)
def process_document(
    payload: ProcessDocumentRequest | None = None,
    processor: Processor = Depends(get_processor),
) -> ProcessDocumentResponse | JSONResponse:
    """Process one uploaded document synchronously."""
    if payload is None or not payload.document_id or not payload.file_path:
        return _error(400, "documentId and filePath required")

    try:
        summary = processor.process(
            payload.document_id,
            payload.file_path,
            criteria=payload.criteria(),
        )
    except Exception as exc:
        Log.error(f"process-document failed for {payload.document_id}: {exc}")
        return _error(500, str(exc) or type(exc).__name__)

    return ProcessDocumentResponse(
        message="Document processed",
        detected_language=summary.detected_language,
        chunks_translated=summary.chunks_translated,
        transaction_count=summary.transaction_count,
    )


@router.get("/search-documents", response_model=None)
def search_documents(
    request: Request,
    user_id: str | None = Query(default=None, alias="userId"),
    query: str | None = None,
    doc_repo: DocumentsRepository = Depends(get_documents_repository),
) -> list[dict[str, Any]] | JSONResponse:
    """Completed documents of a user, filtered by text and transaction fields.

    Transaction criteria come from the ``buyer``, ``seller``, ``houseNumber``,
    ``surveyNumber`` and ``documentNumber`` query parameters.
    """
    if not user_id:
        return _error(400, "userId is required")

    criteria = TransactionFilter.from_mapping(request.query_params)
    try:
        documents = doc_repo.search_completed(user_id, query)
    except Exception as exc:
        Log.error(f"search-documents failed for user {user_id}: {exc}")
        return _error(500, str(exc) or type(exc).__name__)

    matched = filter_documents(documents, criteria)
    Log.info(
        "Search completed",
        user_id=user_id,
        candidates=len(documents),
        matched=len(matched),
    )
    return jsonable_encoder([asdict(document) for document in matched])


@router.get("/health")
def health() -> HealthResponse:
    return HealthResponse(status="OK", at=datetime.now(timezone.utc).isoformat())


def create_app(
    processor: Processor,
    doc_repo: DocumentsRepository,
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """Build the HTTP application around already-constructed dependencies."""
    app = FastAPI(title="Document translation service")
    app.state.processor = processor
    app.state.doc_repo = doc_repo
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.include_router(router)
    return app


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    Log.warning(f"Rejected malformed request to {request.url.path}", errors=len(exc.errors()))
    return _error(400, _VALIDATION_ERRORS.get(request.url.path, "Invalid request"))
