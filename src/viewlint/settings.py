"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from viewlint.parser.xml import MAX_DOCUMENT_SIZE, MAX_ELEMENT_DEPTH


class Settings(BaseSettings):
    """Configuration for the ViewLint REST API server.

    Values are read from environment variables and
    from a ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Shared
    log_level: str = "INFO"

    # REST API
    api_server_host: str = "localhost"
    api_server_port: int = 8000
    port: int | None = None  # Cloud Run injects PORT; takes precedence over api_server_port

    @property
    def effective_port(self) -> int:
        """Return the port to listen on (Cloud Run PORT takes precedence)."""
        return self.port if self.port is not None else self.api_server_port

    # Semantic models
    semantic_model_dir: str | None = None  # *.yaml model files loaded at start-up
    default_framework_version: str | None = None

    # View parsing limits
    max_document_size: int = MAX_DOCUMENT_SIZE
    max_element_depth: int = MAX_ELEMENT_DEPTH
