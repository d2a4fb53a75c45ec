"""
Centralized settings and path configuration for the configurator service.

Values are read from environment variables (or a .env file) with
pydantic-settings. Use get_settings() to access the shared instance.
"""
from pathlib import Path
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    # Walk up from this file to find the project root
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables:
        - CONFIGURATOR_DATA_DIR: directory holding sites/ (default: <project_root>/data)
        - CONFIGURATOR_DEFAULT_SITE: site used when a request names none
        - CONFIGURATOR_ENV: development/dev/local enables test mode for email
        - REVALIDATION_SECRET: shared secret for cache invalidation and catalogue edits
        - SMTP_HOST, SMTP_PORT, SMTP_USERNAME, SMTP_PASSWORD: outgoing mail
        - QUOTE_FROM_ADDRESS, QUOTE_RECIPIENT, QUOTE_TEST_EMAIL: quote addresses
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Project paths
    project_root: Path = Field(default_factory=get_project_root)
    data_dir: Optional[Path] = Field(default=None, validation_alias="CONFIGURATOR_DATA_DIR")

    # Site used when a request does not name one
    default_site: str = Field(default="vpg", validation_alias="CONFIGURATOR_DEFAULT_SITE")
    environment: str = Field(default="production", validation_alias="CONFIGURATOR_ENV")

    # Shared secret for on-demand cache invalidation and catalogue edits
    revalidation_secret: Optional[str] = None

    # Outgoing mail
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    from_address: str = Field(default="VPG <noreply@vpg.be>", validation_alias="QUOTE_FROM_ADDRESS")
    quote_recipient: str = Field(default="info@vpg.be", validation_alias="QUOTE_RECIPIENT")
    test_email: str = Field(default="vpg@jeremys.be", validation_alias="QUOTE_TEST_EMAIL")

    subject_quote_customer: str = "Uw offerte aanvraag"
    subject_quote_admin: str = "Nieuwe offerteaanvraag"

    @model_validator(mode="after")
    def _default_data_dir(self) -> "Settings":
        if self.data_dir is None:
            self.data_dir = self.project_root / 'data'
        return self

    @property
    def is_test_mode(self) -> bool:
        """In development every outgoing email goes to the test address."""
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def sites_dir(self) -> Path:
        return self.data_dir / 'sites'


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
