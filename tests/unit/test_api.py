from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.api.routes import create_app
from app.database.models import DocumentRecord
from app.database.repositories.documents_repository import DocumentsRepository
from app.extraction.filters import TransactionFilter
from app.processor.models import ProcessingSummary
from app.processor.processor import Processor
from app.storage.exceptions import ObjectNotFoundError


def _document(doc_id: str, parsed_data: object) -> DocumentRecord:
    return DocumentRecord(
        id=doc_id,
        user_id="u1",
        filename=f"{doc_id}.pdf",
        file_path=f"u1/{doc_id}.pdf",
        processing_status="completed",
        translated_text="Sale deed",
        detected_language="ta",
        parsed_data=parsed_data,
        created_at=datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc),
    )


@pytest.fixture()
def processor() -> MagicMock:
    mock = MagicMock(spec=Processor)
    mock.process.return_value = ProcessingSummary(
        document_id="doc-1",
        detected_language="ta",
        chunks_translated=1,
        transaction_count=2,
    )
    return mock


@pytest.fixture()
def doc_repo() -> MagicMock:
    return MagicMock(spec=DocumentsRepository)


@pytest.fixture()
def client(processor: MagicMock, doc_repo: MagicMock) -> TestClient:
    return TestClient(create_app(processor, doc_repo))


class TestProcessDocument:
    def test_returns_summary(self, client: TestClient, processor: MagicMock) -> None:
        response = client.post(
            "/process-document", json={"documentId": "doc-1", "filePath": "u1/doc.pdf"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": "Document processed",
            "detected_language": "ta",
            "chunks_translated": 1,
            "transaction_count": 2,
        }
        processor.process.assert_called_once_with(
            "doc-1", "u1/doc.pdf", criteria=TransactionFilter()
        )

    def test_passes_filter_fields(self, client: TestClient, processor: MagicMock) -> None:
        client.post(
            "/process-document",
            json={
                "documentId": "doc-1",
                "filePath": "u1/doc.pdf",
                "buyer": "kumar",
                "houseNumber": "12",
                "surveyNumber": "45",
                "documentNumber": "1/2021",
                "seller": "raman",
            },
        )

        criteria = processor.process.call_args.kwargs["criteria"]
        assert criteria == TransactionFilter(
            buyer="kumar",
            seller="raman",
            house_number="12",
            survey_number="45",
            document_number="1/2021",
        )

    def test_accepts_numeric_document_id(self, client: TestClient, processor: MagicMock) -> None:
        response = client.post("/process-document", json={"documentId": 7, "filePath": "u1/doc.pdf"})
        assert response.status_code == 200
        assert processor.process.call_args.args[0] == "7"

    @pytest.mark.parametrize(
        "body",
        [{}, {"documentId": "doc-1"}, {"filePath": "u1/doc.pdf"}, {"documentId": "", "filePath": "x"}],
    )
    def test_missing_identifiers_is_400(
        self, client: TestClient, processor: MagicMock, body: dict[str, str]
    ) -> None:
        response = client.post("/process-document", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "documentId and filePath required"}
        processor.process.assert_not_called()

    def test_non_json_body_is_400(self, client: TestClient, processor: MagicMock) -> None:
        response = client.post(
            "/process-document",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "documentId and filePath required"}
        processor.process.assert_not_called()

    @pytest.mark.parametrize(
        "body",
        [
            {"documentId": True, "filePath": "u1/doc.pdf"},
            {"documentId": "doc-1", "filePath": ["u1/doc.pdf"]},
            ["doc-1", "u1/doc.pdf"],
        ],
    )
    def test_wrongly_typed_body_is_400(
        self, client: TestClient, processor: MagicMock, body: object
    ) -> None:
        response = client.post("/process-document", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "documentId and filePath required"}
        processor.process.assert_not_called()

    def test_pipeline_failure_is_500(self, client: TestClient, processor: MagicMock) -> None:
        processor.process.side_effect = ObjectNotFoundError("Object not found: pdfs/u1/doc.pdf")
        response = client.post(
            "/process-document", json={"documentId": "doc-1", "filePath": "u1/doc.pdf"}
        )
        assert response.status_code == 500
        assert response.json() == {"error": "Object not found: pdfs/u1/doc.pdf"}


class TestSearchDocuments:
    def test_requires_user_id(self, client: TestClient, doc_repo: MagicMock) -> None:
        response = client.get("/search-documents")
        assert response.status_code == 400
        assert response.json() == {"error": "userId is required"}
        doc_repo.search_completed.assert_not_called()

    def test_returns_completed_documents(self, client: TestClient, doc_repo: MagicMock) -> None:
        doc_repo.search_completed.return_value = [_document("d1", [])]

        response = client.get("/search-documents", params={"userId": "u1", "query": "deed"})

        assert response.status_code == 200
        body = response.json()
        assert [d["id"] for d in body] == ["d1"]
        assert body[0]["processing_status"] == "completed"
        assert body[0]["created_at"].startswith("2024-05-01T10:30:00")
        doc_repo.search_completed.assert_called_once_with("u1", "deed")

    def test_filters_by_transaction_fields(self, client: TestClient, doc_repo: MagicMock) -> None:
        doc_repo.search_completed.return_value = [
            _document("d1", [{"buyer": "A Kumar", "house_no": "12"}]),
            _document("d2", [{"buyer": "B Singh", "house_no": "12"}]),
            _document("d3", [{"buyer": "A Kumar", "house_no": "7"}]),
        ]

        response = client.get(
            "/search-documents",
            params={"userId": "u1", "buyer": "KUMAR", "houseNumber": "12"},
        )

        assert [d["id"] for d in response.json()] == ["d1"]
        doc_repo.search_completed.assert_called_once_with("u1", None)

    def test_filters_by_seller_and_document_number(
        self, client: TestClient, doc_repo: MagicMock
    ) -> None:
        doc_repo.search_completed.return_value = [
            _document("d1", [{"seller": "C Raman", "document_no": "1234/2021"}]),
            _document("d2", [{"seller": "C Raman", "document_no": "88/2020"}]),
        ]

        response = client.get(
            "/search-documents",
            params={"userId": "u1", "seller": "raman", "documentNumber": "/2020"},
        )

        assert [d["id"] for d in response.json()] == ["d2"]

    def test_store_failure_is_500(self, client: TestClient, doc_repo: MagicMock) -> None:
        doc_repo.search_completed.side_effect = RuntimeError("connection refused")
        response = client.get("/search-documents", params={"userId": "u1"})
        assert response.status_code == 500
        assert response.json() == {"error": "connection refused"}


class TestHealth:
    def test_reports_ok_with_timestamp(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert datetime.fromisoformat(body["at"]).tzinfo is not None
