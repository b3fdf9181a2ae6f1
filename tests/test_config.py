"""
Tests for application configuration settings.
"""

from osot_api.config import Settings, get_settings


class TestSettingsDefaults:
    """Test settings default values."""

    def test_default_values_when_env_missing(self):
        """Test that defaults are used when env vars missing."""
        settings = Settings(_env_file=None)

        assert settings.app_name == "OSOT Membership API"
        assert settings.dataverse_api_version == "v9.2"
        assert settings.dataverse_timeout == 30.0
        assert settings.token_max_age == 8 * 60 * 60

    def test_dataverse_not_configured_by_default(self):
        settings = Settings(_env_file=None, dataverse_url="", dataverse_client_id="")
        assert settings.dataverse_configured is False

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestDataverseProperties:
    def make_settings(self) -> Settings:
        return Settings(
            _env_file=None,
            dataverse_url="https://org.crm3.dynamics.com/",
            dataverse_tenant_id="tenant-123",
            dataverse_client_id="client",
            dataverse_client_secret="secret",
        )

    def test_configured(self):
        assert self.make_settings().dataverse_configured is True

    def test_api_base_strips_trailing_slash(self):
        assert self.make_settings().dataverse_api_base == "https://org.crm3.dynamics.com/api/data/v9.2/"

    def test_token_url(self):
        assert self.make_settings().dataverse_token_url == (
            "https://login.microsoftonline.com/tenant-123/oauth2/v2.0/token"
        )

    def test_env_vars_case_insensitive(self, monkeypatch):
        """Test settings are read from upper-case environment variables."""
        monkeypatch.setenv("DATAVERSE_API_VERSION", "v9.1")
        settings = Settings(_env_file=None)
        assert settings.dataverse_api_version == "v9.1"
