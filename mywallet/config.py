"""
Configuration Module

Loads settings from config/mywallet.yaml with environment overrides.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "mywallet.yaml"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _default_database_url() -> str:
    return os.getenv(
        "DATABASE_URL",
        f"postgresql://{os.getenv('POSTGRES_USER', 'mywallet')}:"
        f"{os.getenv('POSTGRES_PASSWORD', 'password')}@"
        f"{os.getenv('POSTGRES_HOST', 'localhost')}:"
        f"{os.getenv('POSTGRES_PORT', '5432')}/"
        f"{os.getenv('POSTGRES_DB', 'mywallet')}"
    )


@dataclass
class Settings:
    """Runtime settings for the ledger backend."""

    database_url: str = field(default_factory=_default_database_url)
    allowed_tlds: list[str] = field(default_factory=lambda: ["com", "net"])
    bcrypt_rounds: int = 10
    debug_endpoints: bool = False
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"
    environment: str = "development"

    @classmethod
    def load(cls, config_path: Path | str | None = None) -> "Settings":
        """Build settings from YAML defaults, then apply environment overrides.

        Args:
            config_path: Path to mywallet.yaml (MYWALLET_CONFIG or the bundled file if None)

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = os.getenv("MYWALLET_CONFIG", DEFAULT_CONFIG_PATH)
        values = _read_yaml(Path(config_path))

        settings = cls(
            database_url=values.get("database_url") or _default_database_url(),
            allowed_tlds=[str(tld).lower() for tld in values.get("allowed_tlds", ["com", "net"])],
            bcrypt_rounds=int(values.get("bcrypt_rounds", 10)),
            debug_endpoints=bool(values.get("debug_endpoints", False)),
            cors_origins=list(values.get("cors_origins", ["http://localhost:3000"])),
            log_level=str(values.get("log_level", "INFO")),
            environment=str(values.get("environment", "development")),
        )
        settings._apply_env()
        return settings

    def _apply_env(self) -> None:
        if os.getenv("DATABASE_URL"):
            self.database_url = os.environ["DATABASE_URL"]
        if os.getenv("MYWALLET_DEBUG_ENDPOINTS"):
            self.debug_endpoints = os.environ["MYWALLET_DEBUG_ENDPOINTS"].lower() in _TRUE_VALUES
        if os.getenv("MYWALLET_BCRYPT_ROUNDS"):
            self.bcrypt_rounds = int(os.environ["MYWALLET_BCRYPT_ROUNDS"])
        if os.getenv("CORS_ORIGINS"):
            self.cors_origins = os.environ["CORS_ORIGINS"].split(",")
        if os.getenv("LOG_LEVEL"):
            self.log_level = os.environ["LOG_LEVEL"]
        if os.getenv("ENVIRONMENT"):
            self.environment = os.environ["ENVIRONMENT"]


def _read_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML mapping, or an empty dict if the file is absent."""
    if not path.exists():
        logger.debug("Config file %s not found, using defaults", path)
        return {}

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data
