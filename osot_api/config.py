"""
Application configuration using pydantic-settings.
Loads values from .env file in project root.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application settings
    app_name: str = "OSOT Membership API"
    debug: bool = False
    log_level: str = "INFO"

    # Token signing (bearer tokens issued to authenticated users)
    secret_key: str = "change-me-in-production"
    token_max_age: int = 8 * 60 * 60

    # Dataverse settings
    dataverse_url: str = ""
    dataverse_tenant_id: str = ""
    dataverse_client_id: str = ""
    dataverse_client_secret: str = ""
    dataverse_api_version: str = "v9.2"
    dataverse_timeout: float = 30.0

    @property
    def dataverse_configured(self) -> bool:
        """Check if Dataverse credentials are fully configured."""
        return bool(
            self.dataverse_url and
            self.dataverse_tenant_id and
            self.dataverse_client_id and
            self.dataverse_client_secret
        )

    @property
    def dataverse_api_base(self) -> str:
        """Base URL of the Dataverse Web API."""
        return f"{self.dataverse_url.rstrip('/')}/api/data/{self.dataverse_api_version}/"

    @property
    def dataverse_token_url(self) -> str:
        """Azure AD token endpoint for the client credentials flow."""
        return (
            f"https://login.microsoftonline.com/"
            f"{self.dataverse_tenant_id}/oauth2/v2.0/token"
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
