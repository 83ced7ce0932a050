"""
Unit tests for application settings.
"""

from app.core.config import Settings


class TestSettings:
    """Tests for Settings defaults and derived values."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.delenv("PYTHON_ENV", raising=False)
        settings = Settings(_env_file=None)
        assert settings.port == 3000
        assert settings.is_development is True
        assert settings.is_production is False
        assert settings.expose_store_errors is True

    def test_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        assert Settings(_env_file=None).port == 8080

    def test_cors_origins_list(self):
        settings = Settings(_env_file=None, cors_origins="https://a.test, https://b.test,")
        assert settings.cors_origins_list == ["https://a.test", "https://b.test"]
