"""Settings for the results API, the importer and the CLI.

Values come from the process environment or a ``.env`` file; variable
names match the field names, case-insensitively.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Results store
    database_url: str = Field(
        default="sqlite+aiosqlite:///./election_data.db",
        description="SQLAlchemy async connection string for the results store",
    )
    valid_year_min_results: int = Field(
        default=1000,
        description="Minimum result rows an election year needs before it is reported",
        gt=0,
    )
    import_batch_size: int = Field(
        default=5000,
        description="CSV rows parsed and inserted per import chunk",
        gt=0,
    )

    # Logging
    log_level: str = Field(default="INFO", description="Minimum level written to the log sinks")
    log_dir: str | None = Field(
        default=None,
        description="When set, also log to a file in this directory (rotated daily, kept a week)",
    )
    log_json: bool = Field(
        default=False,
        description="Write stderr logs as one JSON object per line",
    )

    # HTTP surface
    api_prefix: str = Field(default="/api", description="Prefix for every data endpoint")
    cors_origins: str = Field(
        default="",
        description="Comma-separated browser origins allowed to call the API; empty allows any origin to read",
    )
    cors_origin_regex: str = Field(
        default="",
        description="Regular expression matched against the Origin header, in addition to cors_origins",
    )
    rate_limit_per_minute: int = Field(
        default=200,
        description="Requests a single client may make per rolling minute",
        gt=0,
    )
    trusted_proxy_headers: str = Field(
        default="CF-Connecting-IP,X-Forwarded-For,X-Real-IP",
        description="Comma-separated headers carrying the client address behind a proxy, first match wins",
    )

    @property
    def cors_origin_list(self) -> list[str]:
        """Configured CORS origins, blanks dropped."""
        return _split_csv(self.cors_origins)

    @property
    def trusted_proxy_header_list(self) -> list[str]:
        """Proxy headers in lookup order, blanks dropped."""
        return _split_csv(self.trusted_proxy_headers)


def get_settings() -> Settings:
    """Load settings from the environment."""
    return Settings()
