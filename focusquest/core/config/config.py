"""
Static configuration for FocusQuest.

Purpose
-------
Centralized process-level settings loaded from environment variables (with
.env support) at import time. These are host concerns such as environment
name and logging behavior, not balance values. Balance tunables live in the
YAML files served by `ConfigManager`.

Environment Variables
---------------------
- FOCUSQUEST_ENV: development | testing | staging | production (default: development)
- FOCUSQUEST_LOG_LEVEL: logging level name (default: INFO)
- FOCUSQUEST_LOG_JSON: force JSON console logs (default: on in production)
- FOCUSQUEST_LOG_COLORS: colored console logs on a TTY (default: true)
- FOCUSQUEST_LOG_FILE: optional path for a daily rotating JSON log
- FOCUSQUEST_BALANCE_DIR: directory of balance YAML files (default: bundled)
"""

import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

load_dotenv()


PACKAGE_ROOT = Path(__file__).resolve().parent.parent.parent
BUNDLED_BALANCE_DIR = PACKAGE_ROOT / "config"


class Environment(Enum):
    """Deployment environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"

    @classmethod
    def from_string(cls, value: str) -> "Environment":
        """
        Parse environment string safely with fallback.

        >>> Environment.from_string("production") == Environment.PRODUCTION
        True
        >>> Environment.from_string("invalid") == Environment.DEVELOPMENT
        True
        """
        try:
            return cls(value.lower())
        except ValueError:
            # Structured logger depends on this module; plain logging here.
            import logging
            logging.warning(
                f"Unknown environment '{value}', defaulting to development"
            )
            return cls.DEVELOPMENT


def _env_bool(key: str, default: Optional[bool]) -> Optional[bool]:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """
    Static settings read once from the environment.

    Class attributes only; no instantiation. `reload()` re-reads the
    environment, which tests use after monkeypatching variables.
    """

    ENVIRONMENT: Environment = Environment.DEVELOPMENT
    LOG_LEVEL: str = "INFO"
    LOG_JSON: Optional[bool] = None
    LOG_COLORS: bool = True
    LOG_FILE: Optional[str] = None
    BALANCE_DIR: Path = BUNDLED_BALANCE_DIR

    @classmethod
    def reload(cls) -> None:
        cls.ENVIRONMENT = Environment.from_string(
            os.getenv("FOCUSQUEST_ENV", "development")
        )
        cls.LOG_LEVEL = os.getenv("FOCUSQUEST_LOG_LEVEL", "INFO").upper()
        cls.LOG_JSON = _env_bool("FOCUSQUEST_LOG_JSON", None)
        cls.LOG_COLORS = bool(_env_bool("FOCUSQUEST_LOG_COLORS", True))
        cls.LOG_FILE = os.getenv("FOCUSQUEST_LOG_FILE") or None

        balance_dir = os.getenv("FOCUSQUEST_BALANCE_DIR")
        cls.BALANCE_DIR = Path(balance_dir) if balance_dir else BUNDLED_BALANCE_DIR

    @classmethod
    def is_production(cls) -> bool:
        return cls.ENVIRONMENT == Environment.PRODUCTION

    @classmethod
    def get_config_summary(cls) -> Dict[str, Any]:
        """Snapshot of the active settings for startup logs."""
        return {
            "environment": cls.ENVIRONMENT.value,
            "log_level": cls.LOG_LEVEL,
            "log_json": cls.LOG_JSON,
            "log_colors": cls.LOG_COLORS,
            "log_file": cls.LOG_FILE,
            "balance_dir": str(cls.BALANCE_DIR),
        }


Config.reload()
