import pytest
from pydantic import ValidationError as SettingsValidationError

from workforce.config import Settings
from workforce.config.settings import get_settings
from workforce.validators.config_validators import normalize_url_prefix, to_lowercase, to_uppercase
from ..test_fixtures.settings import make_test_settings


class TestDatabaseUrl:

    def test_sqlite_fallback_without_postgres_host(self):
        settings = make_test_settings(SQLITE_URL="sqlite+aiosqlite:///./local.db")
        assert settings.DATABASE_URL == "sqlite+aiosqlite:///./local.db"

    def test_postgres_url(self):
        settings = make_test_settings(
            TESTING=False,
            POSTGRES_HOST="db",
            POSTGRES_USERNAME="workforce",
            POSTGRES_PASSWORD="secret",
            POSTGRES_DB="workforce",
        )
        assert settings.DATABASE_URL == "postgresql+psycopg://workforce:secret@db:5432/workforce"

    def test_testing_switches_to_test_database(self):
        settings = make_test_settings(
            POSTGRES_HOST="db",
            POSTGRES_USERNAME="u",
            POSTGRES_PASSWORD="p",
            POSTGRES_DB="workforce",
            TEST_POSTGRES_DB="workforce_test",
        )
        assert settings.DATABASE_URL.endswith("/workforce_test")


class TestSettingsValidators:

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.APP_VERSION == "1.0.0"
        assert settings.API_PREFIX == "/api/v1"

    def test_log_level_and_format_are_normalized(self):
        settings = make_test_settings(LOG_LEVEL="debug", LOG_FORMAT="JSON")
        assert (settings.LOG_LEVEL, settings.LOG_FORMAT) == ("DEBUG", "json")

    def test_unknown_log_level_is_rejected(self):
        with pytest.raises(SettingsValidationError):
            make_test_settings(LOG_LEVEL="verbose")

    def test_api_prefix_is_normalized(self):
        assert make_test_settings(API_PREFIX="api/v2/").API_PREFIX == "/api/v2"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("APP_NAME", "branches-api")
        monkeypatch.setenv("LOG_QUEUE_MAX_SIZE", "500")

        settings = Settings(_env_file=None)

        assert settings.APP_NAME == "branches-api"
        assert settings.LOG_QUEUE_MAX_SIZE == 500

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


@pytest.mark.parametrize(
    "raw, expected",
    [("api/v1", "/api/v1"), ("/api/v1/", "/api/v1"), ("", ""), ("/", ""), (None, "")],
)
def test_normalize_url_prefix(raw, expected):
    assert normalize_url_prefix(raw) == expected


def test_case_helpers_pass_none_through():
    assert to_uppercase(None) is None
    assert to_lowercase(None) is None
    assert to_uppercase(" info ") == "INFO"
