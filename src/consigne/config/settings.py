"""
Application settings with environment-based configuration.

Priority (highest to lowest):
1. Environment variables (from .env or system)
2. Environment-specific YAML config file (testnet.yaml, mainnet.yaml)
3. Default YAML config file (default.yaml)
4. Pydantic defaults
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Secrets (Redis password) should come from environment variables,
    not from YAML files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",
    )

    # Application
    APP_NAME: str = "Consigne"
    APP_VERSION: str = "0.1.0"
    ENV: str = Field(default="testnet", description="Environment name")

    # Contract / Network
    CONTRACT_ID: str = Field(..., description="Payment contract address (C...)")
    NETWORK_PASSPHRASE: str = Field(default="Test SDF Network ; September 2015")
    NATIVE_TOKEN_ADDRESS: str = Field(
        default="CDLZFC3SYJYDZT7K67VZ75HPJVIEUVNIXF47ZG2FB2RMQQVU2HHGCYSC",
        description="Stellar Asset Contract of the native asset",
    )

    # Contract bridge
    BRIDGE_URL: str = Field(
        default="http://localhost:8767",
        description="Contract bridge URL",
    )
    BRIDGE_TIMEOUT: float = Field(
        default=30.0,
        gt=0,
        description="Total bridge request timeout in seconds",
    )
    BRIDGE_CONNECT_TIMEOUT: float = Field(
        default=10.0,
        gt=0,
        description="Bridge connect timeout in seconds",
    )

    # Enumeration
    ENUMERATION_CONCURRENCY: int = Field(
        default=8,
        ge=1,
        le=16,
        description="Max concurrent payment body fetches",
    )

    # Identity cache
    CACHE_BACKEND: str = Field(default="memory")
    IDENTITY_CACHE_TTL_SECONDS: Optional[int] = Field(default=None, ge=1)

    # Disconnect marker
    MARKER_BACKEND: str = Field(default="file")
    MARKER_FILE: str = Field(default=".consigne/session.json")

    # Redis
    REDIS_HOST: str = Field(default="localhost")
    REDIS_PORT: int = Field(default=6379, ge=1024, le=65535)
    REDIS_DB: int = Field(default=0, ge=0, le=15)
    REDIS_PASSWORD: Optional[str] = Field(default=None)

    # Username availability
    USERNAME_CHECK_DEBOUNCE: float = Field(
        default=0.5,
        ge=0.0,
        description="Quiet period before an availability check, in seconds",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_JSON: bool = Field(default=True)

    # Observability - Metrics
    METRICS_ENABLED: bool = Field(
        default=False,
        description="Expose Prometheus metrics over HTTP",
    )
    METRICS_HOST: str = Field(default="127.0.0.1")
    METRICS_PORT: int = Field(default=9090, ge=1024, le=65535)

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"Invalid LOG_LEVEL. Must be one of: {allowed}")
        return v_upper

    @field_validator("CACHE_BACKEND")
    @classmethod
    def validate_cache_backend(cls, v: str) -> str:
        """Validate identity cache backend."""
        allowed = ["memory", "redis"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid CACHE_BACKEND. Must be one of: {allowed}")
        return v_lower

    @field_validator("MARKER_BACKEND")
    @classmethod
    def validate_marker_backend(cls, v: str) -> str:
        """Validate disconnect marker backend."""
        allowed = ["file", "redis"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid MARKER_BACKEND. Must be one of: {allowed}")
        return v_lower


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
) -> Settings:
    """
    Load configuration from YAML files and environment variables.

    Priority: ENV vars > environment-specific YAML > default YAML > defaults

    Args:
        config_file: Optional YAML config filename override
        env_file: Optional .env filename (e.g., ".env.testnet")
        env: Optional environment name override (e.g., "testnet", "test")

    Returns:
        Settings instance

    Raises:
        ValidationError: If required fields are missing
    """
    current_file = Path(__file__).resolve()
    project_root = current_file.parent.parent.parent.parent
    config_dir = project_root / "config"

    environment = env or os.getenv("ENV", "testnet")

    if env_file is None:
        env_file = f".env.{environment}"
    if config_file is None:
        config_file = f"{environment}.yaml"

    env_file_path = project_root / env_file
    if env_file_path.exists():
        load_dotenv(env_file_path, override=True)

    default_config_path = config_dir / "default.yaml"
    merged_config = {}

    if default_config_path.exists():
        with open(default_config_path, "r") as f:
            loaded = yaml.safe_load(f)
            if loaded:
                merged_config = loaded

    env_config_path = config_dir / config_file
    if env_config_path.exists():
        with open(env_config_path, "r") as f:
            loaded = yaml.safe_load(f)
            if loaded:
                merged_config.update(loaded)

    # Init kwargs outrank env vars in pydantic-settings; drop YAML keys
    # that the environment already sets.
    merged_config = {k: v for k, v in merged_config.items() if k not in os.environ}

    return Settings(**merged_config)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or initialize global settings singleton."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Override global settings (for testing)."""
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to force re-initialization (for testing)."""
    global _settings
    _settings = None
