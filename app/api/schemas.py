from pydantic import BaseModel, ConfigDict, Field

from app.extraction.filters import TransactionFilter


class ProcessDocumentRequest(BaseModel):
    """Body of POST /process-document.

    Identifiers are optional here so that a missing one is answered with the
    service's own 400 error instead of a validation error.
    """

    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", coerce_numbers_to_str=True
    )

    document_id: str | None = Field(default=None, alias="documentId")
    file_path: str | None = Field(default=None, alias="filePath")
    buyer: str | None = None
    seller: str | None = None
    house_number: str | None = Field(default=None, alias="houseNumber")
    survey_number: str | None = Field(default=None, alias="surveyNumber")
    document_number: str | None = Field(default=None, alias="documentNumber")

    def criteria(self) -> TransactionFilter:
        return TransactionFilter.from_mapping(self.model_dump())


class ProcessDocumentResponse(BaseModel):
    message: str
    detected_language: str
    chunks_translated: int
    transaction_count: int


class HealthResponse(BaseModel):
    status: str
    at: str
