"""Service configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

_PACKAGE_DIR = Path(__file__).resolve().parent


class SmtpConfig(BaseSettings):
    """Mail transport settings.

    Real delivery only happens when host, user and password are all set.
    Otherwise submissions are acknowledged without sending anything.
    """

    model_config = SettingsConfigDict(env_prefix="EMAIL_", populate_by_name=True)

    host: str | None = Field(default=None, description="SMTP server hostname")
    port: int = Field(default=587, description="SMTP server port")
    secure: bool = Field(
        default=False,
        description="Use implicit TLS (port 465); otherwise STARTTLS when offered",
    )
    user: str | None = Field(default=None, description="SMTP login username")
    password: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("EMAIL_PASS", "EMAIL_PASSWORD"),
        description="SMTP login password",
    )
    from_address: str | None = Field(
        default=None,
        validation_alias="EMAIL_FROM",
        description="Sender override (defaults to the requester's address)",
    )
    timeout_seconds: float = Field(
        default=5.0,
        description="Upper bound for a single send, including connect",
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.user and self.password)


class Settings(BaseSettings):
    """Top-level settings for the design request service.

    Service env vars are prefixed with ``DESIGN_REQUEST_``; ``NODE_ENV`` and
    ``PORT`` are honoured as well so existing deployments keep working.
    """

    model_config = SettingsConfigDict(env_prefix="DESIGN_REQUEST_", populate_by_name=True)

    environment: str = Field(
        default="production",
        validation_alias=AliasChoices("DESIGN_REQUEST_ENVIRONMENT", "NODE_ENV"),
        description="Deployment environment; 'development' exposes diagnostics",
    )

    # --- Server -------------------------------------------------------------
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(
        default=3000,
        validation_alias=AliasChoices("DESIGN_REQUEST_PORT", "PORT"),
        description="Bind port",
    )
    static_dir: Path = Field(
        default=_PACKAGE_DIR / "static",
        description="Directory holding index.html and other landing-page assets",
    )
    log_level: str = Field(default="INFO", description="Log level")
    log_json: bool = Field(
        default=True,
        description="Use JSON log output (True for prod, False for dev)",
    )

    smtp: SmtpConfig = Field(default_factory=SmtpConfig)

    @property
    def development(self) -> bool:
        return self.environment.lower() == "development"
