from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Dashboard configuration read from environment variables."""

    app_name: str = Field(default="Ticketdesk")
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="%(levelname)s %(name)s %(message)s")

    # Ticket API used by the detail view
    api_base_url: str = Field(default="http://localhost:8000")
    api_token: str | None = Field(default=None)
    api_timeout: float = Field(default=10.0)

    # Status workflow
    read_only: bool = Field(default=False)
    # Lets a closed ticket be moved back, behind confirmation. Off until product confirms.
    allow_reopen: bool = Field(default=False)

    # Observability configuration
    otel_enabled: bool = Field(default=False)
    otel_service_name: str = Field(default="ticketdesk")
    otel_exporter_otlp_endpoint: str | None = Field(default=None)
    otel_exporter_otlp_headers: str | None = Field(default=None)

    class Config:
        env_prefix = "TICKETDESK_"
        env_file = ".env"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of the dashboard settings."""

    return Settings()
