from abc import ABC, abstractmethod

from app.pdf.exceptions import PdfExtractionError


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters.

    Adapters only return per-page text; joining, trimming and error wrapping
    happen here so every engine behaves the same towards the pipeline.
    """

    engine_name: str = "base"

    def extract(self, pdf_bytes: bytes) -> str:
        """Extract plain text from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            Page texts joined by newlines, stripped. Empty for image-only PDFs.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """
        if not pdf_bytes:
            raise PdfExtractionError("Cannot extract text from an empty file")
        try:
            pages = self._extract_pages(pdf_bytes)
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(
                f"{self.engine_name} extraction failed: {exc}"
            ) from exc
        return "\n".join(pages).strip()

    @abstractmethod
    def _extract_pages(self, pdf_bytes: bytes) -> list[str]:
        """Return the text of each page in order."""
