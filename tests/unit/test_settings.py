import pytest
from pydantic import ValidationError

from app.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_max_event_attempts(self) -> None:
        s = Settings()
        assert s.max_event_attempts == 3

    def test_default_event_poll_interval(self) -> None:
        s = Settings()
        assert s.event_poll_interval_seconds == 5

    def test_default_status_store_backend(self) -> None:
        s = Settings()
        assert s.status_store_backend == "postgres"

    def test_default_oracle_provider(self) -> None:
        s = Settings()
        assert s.oracle_provider == "openai"

    def test_default_stage_budgets(self) -> None:
        s = Settings()
        assert (s.extraction_max_tokens, s.extraction_timeout_seconds) == (4000, 300)
        assert (s.classification_max_tokens, s.classification_timeout_seconds) == (100, 120)
        assert (s.summarization_max_tokens, s.summarization_timeout_seconds) == (500, 60)

    def test_default_result_polling(self) -> None:
        s = Settings()
        assert s.result_poll_interval_seconds == 5
        assert s.result_poll_max_attempts == 60


class TestSettingsFromEnv:
    def test_loads_app_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        s = Settings()
        assert s.app_env == "production"

    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_db_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_HOST", "db.example.com")
        s = Settings()
        assert s.db_host == "db.example.com"

    def test_loads_worker_concurrency(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WORKER_CONCURRENCY", "8")
        s = Settings()
        assert s.worker_concurrency == 8

    def test_loads_summarization_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUMMARIZATION_TIMEOUT_SECONDS", "90")
        s = Settings()
        assert s.summarization_timeout_seconds == 90


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_max_attempts_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_EVENT_ATTEMPTS", "abc")
        with pytest.raises(ValidationError):
            Settings()
