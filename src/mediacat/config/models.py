"""Configuration models describing Mediacat settings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class MediacatBaseModel(BaseModel):
    """Shared configuration for Mediacat Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class MediaSettings(MediacatBaseModel):
    """Location and publishing options for the cataloged directory.

    Attributes:
        directory: Flat directory whose entries make up the catalog.
        url_prefix: Published path prefix prepended to each encoded filename.
        include_directories: Whether subdirectories appear as ``other`` entries.
        include_hidden: Whether dot-prefixed entries are cataloged.
    """

    directory: str = "public/Media"
    url_prefix: str = "/Media"
    include_directories: bool = False
    include_hidden: bool = True

    @field_validator("url_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        stripped = value.strip().rstrip("/")
        if not stripped.startswith("/"):
            stripped = "/" + stripped
        return stripped


class ServerSettings(MediacatBaseModel):
    """HTTP endpoint options.

    Attributes:
        host: Interface the server binds to.
        port: TCP port the server listens on.
        endpoint_path: Route that returns the catalog listing.
        serve_files: Whether the media directory is also served at ``url_prefix``.
    """

    host: str = "127.0.0.1"
    port: int = Field(default=3000, ge=1, le=65535)
    endpoint_path: str = "/api/media"
    serve_files: bool = True


class ClientSettings(MediacatBaseModel):
    """Options for the catalog browsing client.

    Attributes:
        base_url: Origin of the server exposing the catalog endpoint.
        notification_seconds: Lifetime of transient notifications.
    """

    base_url: str = "http://127.0.0.1:3000"
    notification_seconds: float = Field(default=1.8, gt=0)


class LoggingSettings(MediacatBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: str = "WARNING"

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"Unknown logging level: {value}")
        return normalized


class CLIOptions(MediacatBaseModel):
    """CLI behavior defaults.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
    """

    quiet_default: bool = False


class MediacatConfig(MediacatBaseModel):
    """Top-level configuration struct for Mediacat.

    Attributes:
        media: Cataloged directory settings.
        server: HTTP endpoint settings.
        client: Browsing client settings.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    media: MediaSettings = Field(default_factory=MediaSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    client: ClientSettings = Field(default_factory=ClientSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "MediacatBaseModel",
    "MediaSettings",
    "ServerSettings",
    "ClientSettings",
    "LoggingSettings",
    "CLIOptions",
    "MediacatConfig",
]
