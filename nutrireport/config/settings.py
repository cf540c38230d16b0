from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "nutrireport"
    db_username: str = "nutrireport"
    db_password: str = "secret"

    max_upload_bytes: int = 10 * 1024 * 1024

    storage_backend: str = "local"
    files_root: str = "/app/files"
    public_base_url: str = "http://localhost:8080/files"
    supabase_url: str = ""
    supabase_key: str = ""
    storage_bucket: str = "reports"
    fetch_timeout_seconds: int = 30

    ocr_engine: str = "tesseract"
    ocr_language: str = "eng"
    tesseract_cmd: str = ""
    ocr_openai_api_key: str = ""
    ocr_openai_model_name: str = "gpt-4o-mini"
    ocr_openai_base_url: str = ""
    ocr_openai_timeout_seconds: int = 60
