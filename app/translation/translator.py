from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass

from app.language.detector import AUTO
from app.llm.client_base import BaseLlmClient
from app.logging.logger import Log
from app.translation.chunker import DEFAULT_CHUNK_SIZE, chunk_text
from app.translation.prompts import build_translation_prompt


@dataclass(frozen=True)
class ChunkOutcome:
    """Settled result of translating one chunk."""

    index: int
    text: str = ""
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Translator:
    """Translates text to English chunk by chunk under a concurrency cap.

    A failed chunk never fails the document: it is logged and contributes an
    empty string at its position. Output order always follows chunk order.
    """

    def __init__(
        self,
        *,
        client: BaseLlmClient,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        max_concurrency: int = 6,
        specialized_language: str = "ta",
    ) -> None:
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")
        self._client = client
        self._chunk_size = chunk_size
        self._max_concurrency = max_concurrency
        self._specialized_language = specialized_language

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    def translate(self, text: str, source_language: str = AUTO) -> str:
        if not text:
            return ""
        chunks = chunk_text(text, self._chunk_size)
        outcomes = self.translate_chunks(chunks, source_language)
        result = "\n".join(outcome.text for outcome in outcomes).strip()
        Log.info(
            "Translation completed",
            chunks=len(chunks),
            failed_chunks=sum(1 for outcome in outcomes if not outcome.ok),
            length=len(result),
        )
        return result

    def translate_chunks(self, chunks: list[str], source_language: str) -> list[ChunkOutcome]:
        """Translate every chunk and return one outcome per chunk, in chunk order."""
        if not chunks:
            return []
        Log.info(f"Starting translation of {len(chunks)} chunks", language=source_language)
        workers = min(self._max_concurrency, len(chunks))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="translate") as pool:
            futures = [
                pool.submit(self._translate_chunk, chunk, source_language, index, len(chunks))
                for index, chunk in enumerate(chunks)
            ]
            return [self._settle(index, future) for index, future in enumerate(futures)]

    def _translate_chunk(self, chunk: str, source_language: str, index: int, total: int) -> str:
        prompt = build_translation_prompt(chunk, source_language, self._specialized_language)
        Log.debug(f"Translating chunk {index + 1}/{total}")
        return self._client.generate(prompt)

    @staticmethod
    def _settle(index: int, future: "Future[str]") -> ChunkOutcome:
        try:
            return ChunkOutcome(index=index, text=future.result())
        except Exception as exc:
            Log.error(f"Chunk {index + 1} translation failed", error=exc)
            return ChunkOutcome(index=index, error=exc)
