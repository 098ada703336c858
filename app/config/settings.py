from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "docpipeline"
    db_username: str = "docpipeline"
    db_password: str = "secret"

    max_event_attempts: int = 3
    event_poll_interval_seconds: int = 5
    worker_concurrency: int = 4

    files_root: str = "/app/files"
    status_store_backend: str = "postgres"

    oracle_provider: str = "openai"
    oracle_api_key: str = ""
    oracle_model_name: str = ""
    oracle_base_url: str = ""

    extraction_max_tokens: int = 4000
    extraction_timeout_seconds: int = 300
    classification_max_tokens: int = 100
    classification_timeout_seconds: int = 120
    summarization_max_tokens: int = 500
    summarization_timeout_seconds: int = 60

    result_poll_interval_seconds: int = 5
    result_poll_max_attempts: int = 60
    results_api_base_url: str = "http://localhost:8000"
