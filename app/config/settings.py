from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    port: int = 3002
    cors_origins: list[str] = ["*"]

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "doctranslate"
    db_username: str = "doctranslate"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10

    storage_backend: str = "supabase"
    storage_bucket: str = "pdfs"
    storage_root: str = "/app/files"
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    storage_timeout_seconds: int = 30

    pdf_engine: str = "pdfplumber"

    gemini_api_key: str = ""
    gemini_api_url: str = (
        "https://generativelanguage.googleapis.com/v1beta/models/"
        "gemini-2.5-flash:generateContent"
    )
    gemini_timeout_seconds: int = 60
    gemini_max_retries: int = 2
    gemini_min_backoff_seconds: float = 0.8
    gemini_max_backoff_seconds: float = 2.0

    translation_chunk_size: int = 15000
    translation_max_concurrency: int = 6
    specialized_source_language: str = "ta"
    language_min_length: int = 20
