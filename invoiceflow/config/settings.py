"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"


class StorageSettings(BaseSettings):
    """Durable key-value medium configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    backend: Literal["sqlite", "memory"] = "sqlite"
    data_dir: Path = Path("data")
    db_name: str = "invoiceflow.db"

    # SQLite settings
    pool_size: int = Field(default=2, ge=1)
    busy_timeout: int = 30000  # ms

    # Storage keys, same names as the browser app's local storage
    org_details_key: str = "invoiceflow_org_details"
    inventory_key: str = "invoiceflow_inventory"
    invoices_key: str = "invoiceflow_invoices"
    action_log_key: str = "invoiceflow_action_log"
    invoice_counter_key: str = "invoiceflow_invoice_counter"

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class LedgerSettings(BaseSettings):
    """Invoice numbering, audit log and record policies."""

    model_config = SettingsConfigDict(env_prefix="LEDGER_")

    action_log_limit: int = Field(default=100, ge=1)

    invoice_number_prefix: str = "INV-"
    invoice_number_width: int = Field(default=4, ge=1)
    numbering: Literal["scan", "counter"] = "scan"

    # What update/delete do when the id is unknown
    missing_record_policy: Literal["ignore", "raise"] = "ignore"


class OrganizationDefaults(BaseSettings):
    """Fallback values for organization profile fields."""

    model_config = SettingsConfigDict(env_prefix="ORG_")

    invoice_header_color: str = Field(default="#739EDC", pattern=HEX_COLOR_PATTERN)
    theme_accent_color: str = Field(default="#149E8E", pattern=HEX_COLOR_PATTERN)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "InvoiceFlow"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    ledger: LedgerSettings = Field(default_factory=LedgerSettings)
    organization: OrganizationDefaults = Field(default_factory=OrganizationDefaults)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v):
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        if settings.backend == "sqlite":
            settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
