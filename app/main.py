import uvicorn

from app.api.routes import create_app
from app.config.settings import Settings
from app.database.connection import close_pool, init_pool
from app.database.repositories.documents_repository import DocumentsRepository
from app.logging.logger import Log
from app.processor.processor import build_processor


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> serve HTTP."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        doc_repo = DocumentsRepository()
        processor = build_processor(settings, doc_repo=doc_repo)
        app = create_app(processor, doc_repo, cors_origins=settings.cors_origins)
        Log.info(f"Document processing server listening on port {settings.port}")
        uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())
    finally:
        close_pool()


if __name__ == "__main__":
    main()
