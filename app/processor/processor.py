from app.config.settings import Settings
from app.database.repositories.documents_repository import DocumentsRepository
from app.extraction.field_extractor import FieldExtractor
from app.extraction.filters import TransactionFilter
from app.language.detector import LanguageDetector
from app.llm.client_base import BaseLlmClient
from app.llm.gemini_client import GeminiClient
from app.logging.logger import Log
from app.pdf.factory import PdfExtractorFactory
from app.processor.models import ProcessingSummary
from app.processor.pipeline import PipelineContext, PipelineStep
from app.processor.steps import (
    DetectLanguageStep,
    DownloadStep,
    ExtractFieldsStep,
    ExtractTextStep,
    FilterTransactionsStep,
    MarkFailedStep,
    MarkProcessingStep,
    PersistCompletedStep,
    TranslateStep,
)
from app.storage.base import BaseObjectStore
from app.storage.factory import ObjectStoreFactory
from app.translation.translator import Translator


class Processor:
    """Runs the document processing pipeline for one document.

    Pipeline: mark processing -> download -> extract -> detect language ->
    translate -> extract fields -> filter -> persist completed.

    Any exception marks the document failed and is re-raised to the caller.
    Text columns are only written by the final step, so a failed run leaves
    them as they were.
    """

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def process(
        self,
        document_id: str,
        storage_path: str,
        criteria: TransactionFilter | None = None,
    ) -> ProcessingSummary:
        Log.info(f"Processing document {document_id}", path=storage_path)
        context = PipelineContext(
            document_id=document_id,
            storage_path=storage_path,
            criteria=criteria or TransactionFilter(),
        )
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:
            context.error_message = str(exc) or type(exc).__name__
            self._mark_failed(context)
            raise

        return ProcessingSummary(
            document_id=document_id,
            detected_language=context.detected_language,
            chunks_translated=context.chunk_count,
            transaction_count=len(context.filtered_transactions),
        )

    def _mark_failed(self, context: PipelineContext) -> None:
        try:
            self._failed_step.run(context)
        except Exception:
            Log.exception(f"Could not mark document {context.document_id} as failed")


def build_processor(
    settings: Settings,
    *,
    doc_repo: DocumentsRepository | None = None,
    object_store: BaseObjectStore | None = None,
    llm_client: BaseLlmClient | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    doc_repo = doc_repo or DocumentsRepository()
    object_store = object_store or ObjectStoreFactory.create(settings)
    llm_client = llm_client or GeminiClient(
        api_key=settings.gemini_api_key,
        api_url=settings.gemini_api_url,
        timeout_seconds=settings.gemini_timeout_seconds,
        max_retries=settings.gemini_max_retries,
        min_backoff_seconds=settings.gemini_min_backoff_seconds,
        max_backoff_seconds=settings.gemini_max_backoff_seconds,
    )
    translator = Translator(
        client=llm_client,
        chunk_size=settings.translation_chunk_size,
        max_concurrency=settings.translation_max_concurrency,
        specialized_language=settings.specialized_source_language,
    )
    steps: list[PipelineStep] = [
        MarkProcessingStep(doc_repo),
        DownloadStep(object_store, settings.storage_bucket),
        ExtractTextStep(PdfExtractorFactory.create(settings)),
        DetectLanguageStep(LanguageDetector(min_length=settings.language_min_length)),
        TranslateStep(translator),
        ExtractFieldsStep(FieldExtractor(llm_client)),
        FilterTransactionsStep(),
        PersistCompletedStep(doc_repo),
    ]
    return Processor(steps=steps, failed_step=MarkFailedStep(doc_repo))
