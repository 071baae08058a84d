"""Tests for application configuration."""
import pytest
from pydantic import ValidationError

from core.config import Settings


class TestCorsOriginsParsing:
    """Tests for CORS origins parsing from environment variables."""

    def test_parse_multiple_origins_comma_separated(self) -> None:
        """Multiple comma-separated origins are parsed correctly."""
        settings = Settings(
            _env_file=None,
            database_url="sqlite+aiosqlite:///:memory:",
            API_TOKEN="token",
            CORS_ORIGINS="http://localhost:3000,https://example.com",
        )
        assert settings.cors_origins == [
            "http://localhost:3000",
            "https://example.com",
        ]

    def test_parse_origins_with_whitespace_and_trailing_comma(self) -> None:
        """Whitespace is stripped and empty entries are dropped."""
        settings = Settings(
            _env_file=None,
            database_url="sqlite+aiosqlite:///:memory:",
            API_TOKEN="token",
            CORS_ORIGINS="  http://localhost:3000 , https://example.com,",
        )
        assert settings.cors_origins == [
            "http://localhost:3000",
            "https://example.com",
        ]

    def test_parse_empty_string(self) -> None:
        """Empty string results in empty list."""
        settings = Settings(
            _env_file=None,
            database_url="sqlite+aiosqlite:///:memory:",
            API_TOKEN="token",
            CORS_ORIGINS="",
        )
        assert settings.cors_origins == []

    def test_default_cors_origins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Default CORS origin is localhost:3000."""
        monkeypatch.delenv("CORS_ORIGINS", raising=False)
        settings = Settings(
            _env_file=None,
            database_url="sqlite+aiosqlite:///:memory:",
            API_TOKEN="token",
        )
        assert settings.cors_origins == ["http://localhost:3000"]


class TestApiToken:
    """Tests for the static API token setting."""

    def test_token_read_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """API_TOKEN is loaded from the environment."""
        monkeypatch.setenv("API_TOKEN", "from-env")
        settings = Settings(_env_file=None, database_url="sqlite+aiosqlite:///:memory:")
        assert settings.api_token == "from-env"

    def test_token_accepts_field_name(self) -> None:
        """The token can also be passed by field name."""
        settings = Settings(
            _env_file=None,
            database_url="sqlite+aiosqlite:///:memory:",
            api_token="by-name",
        )
        assert settings.api_token == "by-name"

    @pytest.mark.parametrize("token", ["", "   "])
    def test_blank_token_rejected(self, token: str) -> None:
        """A blank token is a configuration error."""
        with pytest.raises(ValidationError, match="API_TOKEN must not be empty"):
            Settings(
                _env_file=None,
                database_url="sqlite+aiosqlite:///:memory:",
                API_TOKEN=token,
            )

    def test_missing_token_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The token has no default."""
        monkeypatch.delenv("API_TOKEN", raising=False)
        with pytest.raises(ValidationError):
            Settings(_env_file=None, database_url="sqlite+aiosqlite:///:memory:")


class TestEnvironment:
    """Tests for environment-dependent behavior."""

    @pytest.mark.parametrize(
        ("environment", "expected"),
        [("production", True), ("PRODUCTION", True), ("development", False), ("test", False)],
    )
    def test_is_production(self, environment: str, expected: bool) -> None:
        settings = Settings(
            _env_file=None,
            database_url="sqlite+aiosqlite:///:memory:",
            API_TOKEN="token",
            ENVIRONMENT=environment,
        )
        assert settings.is_production is expected

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("ENVIRONMENT", "LOG_LEVEL", "LOG_FILE", "MAX_TITLE_LENGTH"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(
            _env_file=None,
            database_url="sqlite+aiosqlite:///:memory:",
            API_TOKEN="token",
        )
        assert settings.environment == "development"
        assert settings.log_level == "INFO"
        assert settings.log_file is None
        assert settings.max_title_length == 500
