from app.database.repositories.documents_repository import DocumentsRepository
from app.extraction.field_extractor import FieldExtractor
from app.language.detector import LanguageDetector
from app.logging.logger import Log
from app.pdf.base import BasePdfExtractor
from app.processor.pipeline import PipelineContext, PipelineStep
from app.storage.base import BaseObjectStore
from app.translation.chunker import count_chunks
from app.translation.translator import Translator


class MarkProcessingStep(PipelineStep):
    def __init__(self, doc_repo: DocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._doc_repo.mark_processing(context.document_id)
        Log.info(f"Document {context.document_id} marked as processing")
        return context


class MarkFailedStep(PipelineStep):
    def __init__(self, doc_repo: DocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._doc_repo.mark_failed(context.document_id, context.error_message)
        Log.error(
            f"Document {context.document_id} marked as failed: {context.error_message}"
        )
        return context


class DownloadStep(PipelineStep):
    def __init__(self, object_store: BaseObjectStore, bucket: str) -> None:
        self._object_store = object_store
        self._bucket = bucket

    def run(self, context: PipelineContext) -> PipelineContext:
        context.raw_bytes = self._object_store.download(self._bucket, context.storage_path)
        Log.info(
            f"Downloaded {len(context.raw_bytes)} bytes for document {context.document_id}",
            path=context.storage_path,
        )
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, pdf_extractor: BasePdfExtractor) -> None:
        self._pdf_extractor = pdf_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        context.original_text = self._pdf_extractor.extract(context.raw_bytes)
        Log.info(
            f"Extracted {len(context.original_text)} chars from document "
            f"{context.document_id}"
        )
        return context


class DetectLanguageStep(PipelineStep):
    def __init__(self, detector: LanguageDetector) -> None:
        self._detector = detector

    def run(self, context: PipelineContext) -> PipelineContext:
        context.detected_language = self._detector.detect(context.original_text)
        Log.info(
            f"Detected language '{context.detected_language}' for document "
            f"{context.document_id}"
        )
        return context


class TranslateStep(PipelineStep):
    def __init__(self, translator: Translator) -> None:
        self._translator = translator

    def run(self, context: PipelineContext) -> PipelineContext:
        context.chunk_count = count_chunks(context.original_text, self._translator.chunk_size)
        context.translated_text = self._translator.translate(
            context.original_text, context.detected_language
        )
        Log.info(
            f"Translated document {context.document_id}: "
            f"{context.chunk_count} chunks, {len(context.translated_text)} chars"
        )
        return context


class ExtractFieldsStep(PipelineStep):
    def __init__(self, field_extractor: FieldExtractor) -> None:
        self._field_extractor = field_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        context.transactions = self._field_extractor.extract(context.translated_text)
        Log.info(
            f"Extracted {len(context.transactions)} transactions from document "
            f"{context.document_id}"
        )
        return context


class FilterTransactionsStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.filtered_transactions = context.criteria.apply(context.transactions)
        if not context.criteria.is_empty():
            Log.info(
                f"Filtered to {len(context.filtered_transactions)} transactions",
                document_id=context.document_id,
            )
        return context


class PersistCompletedStep(PipelineStep):
    def __init__(self, doc_repo: DocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._doc_repo.mark_completed(
            context.document_id,
            original_text=context.original_text,
            translated_text=context.translated_text,
            detected_language=context.detected_language,
            parsed_data=context.filtered_transactions,
        )
        Log.info(f"Document {context.document_id} processing completed")
        return context
