"""
Configuration for Moonshine.

Supports loading from:
1. Environment variables (highest priority)
2. YAML config file
3. Default values (fallback)

Embedding provider, API keys and search defaults are not configuration:
they live in the database ``settings`` table and are read on every call.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


def default_db_path() -> str:
    """Database location used by the desktop app (XDG data dir)."""
    data_home = os.getenv("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return str(Path(data_home) / "com.moonshine.app" / "moonshine.db")


class StorageConfig(BaseModel):
    """SQLite storage configuration."""

    db_path: str = Field(default_factory=default_db_path)
    read_only: bool = False
    create_if_missing: bool = False
    busy_timeout_ms: int = 5000


class EmbedderConfig(BaseModel):
    """Embedding provider transport configuration."""

    openai_base_url: str = "https://api.openai.com/v1"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout: float = 120.0


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"
    file_rotation: str = "10 MB"
    file_retention: str = "7 days"
    compression: str = "zip"
    serialize: bool = True


class ServerConfig(BaseModel):
    """Transport configuration."""

    transport: str = "stdio"  # stdio, http
    host: str = "127.0.0.1"
    port: int = 8000


class Config(BaseModel):
    """Main configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    embedder: EmbedderConfig = Field(default_factory=EmbedderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """
        Load configuration from environment variables.

        Priority: .env file -> system environment variables -> defaults

        Args:
            env_file: Optional path to .env file (default: .env in working directory)

        Returns:
            Config instance

        Environment variables:
            MOONSHINE_DB_PATH: SQLite database path
            MOONSHINE_READ_ONLY: Open the database read-only ("true")
            MOONSHINE_CREATE_IF_MISSING: Create an empty database if none exists
            MOONSHINE_DEBUG: Force DEBUG log level ("true")
            MOONSHINE_LOG_LEVEL: Log level
            MOONSHINE_LOG_TO_FILE: Also write rotating JSON log files
            MOONSHINE_OPENAI_BASE_URL: OpenAI API base URL
            MOONSHINE_GEMINI_BASE_URL: Gemini API base URL
            MOONSHINE_EMBEDDER_TIMEOUT: Embedding request timeout in seconds
            MOONSHINE_TRANSPORT: stdio or http
            MOONSHINE_HTTP_HOST / MOONSHINE_HTTP_PORT: HTTP bind address
        """
        if env_file:
            load_dotenv(env_file)
        elif Path(".env").exists():
            load_dotenv()

        def get_env(key: str, default: Any = None) -> Any:
            """Get environment variable with type conversion."""
            value = os.getenv(key)
            if value is None:
                return default
            if value == "":
                return default
            if isinstance(default, bool):
                return str(value).lower() in ("true", "1", "yes")
            if isinstance(default, int):
                return int(value)
            if isinstance(default, float):
                return float(value)
            return value

        level = get_env("MOONSHINE_LOG_LEVEL", "INFO")
        if get_env("MOONSHINE_DEBUG", False):
            level = "DEBUG"

        return cls(
            storage=StorageConfig(
                db_path=get_env("MOONSHINE_DB_PATH", default_db_path()),
                read_only=get_env("MOONSHINE_READ_ONLY", False),
                create_if_missing=get_env("MOONSHINE_CREATE_IF_MISSING", False),
                busy_timeout_ms=get_env("MOONSHINE_BUSY_TIMEOUT_MS", 5000),
            ),
            embedder=EmbedderConfig(
                openai_base_url=get_env("MOONSHINE_OPENAI_BASE_URL", "https://api.openai.com/v1"),
                gemini_base_url=get_env(
                    "MOONSHINE_GEMINI_BASE_URL",
                    "https://generativelanguage.googleapis.com/v1beta",
                ),
                timeout=get_env("MOONSHINE_EMBEDDER_TIMEOUT", 120.0),
            ),
            logging=LoggingConfig(
                level=level,
                log_to_file=get_env("MOONSHINE_LOG_TO_FILE", False),
                log_dir=get_env("MOONSHINE_LOG_DIR", "logs"),
                file_rotation=get_env("MOONSHINE_LOG_FILE_ROTATION", "10 MB"),
                file_retention=get_env("MOONSHINE_LOG_FILE_RETENTION", "7 days"),
                compression=get_env("MOONSHINE_LOG_COMPRESSION", "zip"),
                serialize=get_env("MOONSHINE_LOG_SERIALIZE", True),
            ),
            server=ServerConfig(
                transport=get_env("MOONSHINE_TRANSPORT", "stdio"),
                host=get_env("MOONSHINE_HTTP_HOST", "127.0.0.1"),
                port=get_env("MOONSHINE_HTTP_PORT", 8000),
            ),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            yaml.YAMLError: If YAML is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    @classmethod
    def from_env_or_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str | Path | None = None
    ) -> "Config":
        """
        Load configuration with priority: env vars > YAML > defaults.

        Args:
            yaml_path: Optional path to YAML config
            env_file: Optional path to .env file

        Returns:
            Config instance
        """
        if yaml_path and Path(yaml_path).exists():
            with open(yaml_path) as f:
                config_dict = yaml.safe_load(f) or {}
        else:
            config_dict = {}

        env_config = cls.from_env(env_file=env_file)

        # Sections that differ from defaults were set through the environment
        final_dict = {**config_dict}
        default = cls()
        if env_config.storage != default.storage:
            final_dict["storage"] = env_config.storage.model_dump()
        if env_config.embedder != default.embedder:
            final_dict["embedder"] = env_config.embedder.model_dump()
        if env_config.logging != default.logging:
            final_dict["logging"] = env_config.logging.model_dump()
        if env_config.server != default.server:
            final_dict["server"] = env_config.server.model_dump()

        return cls(**final_dict) if final_dict else env_config
