"""
Artifact: planner_service/smartstudy/core/config.py
Purpose: Centralizes environment loading and static service configuration values.
Author: SmartStudy Team
Created: 2026-10-12
Revised:
- 2026-10-12: Added study-guide model, timeout, and enrichment feature-flag settings. (SmartStudy Team)
Preconditions:
- Environment variables may be present in process env and optional .env file.
Inputs:
- Acceptable: String environment variables such as NVIDIA_API_KEY or STUDY_GUIDE_TIMEOUT_SECONDS.
- Unacceptable: Non-numeric strings for numeric settings (these fall back to defaults).
Postconditions:
- Dotenv variables are loaded and configuration accessors are available to callers.
Returns:
- Settings object with service title and helper accessors.
Errors/Exceptions:
- No explicit exceptions; malformed values are replaced by defaults.
"""

import os

from dotenv import load_dotenv


load_dotenv()

DEFAULT_STUDY_GUIDE_MODEL = "meta/llama-3.1-8b-instruct"
DEFAULT_STUDY_GUIDE_TEMPERATURE = 0.3
DEFAULT_STUDY_GUIDE_MAX_TOKENS = 2048
DEFAULT_STUDY_GUIDE_TIMEOUT_SECONDS = 20.0


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"0", "false", "no", "off"}


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


class Settings:
    """Application-level configuration values."""

    app_title: str = "SmartStudy Planner Service"

    @staticmethod
    def nvidia_api_key() -> str:
        return os.getenv("NVIDIA_API_KEY", "")

    @staticmethod
    def study_guide_model() -> str:
        return os.getenv("STUDY_GUIDE_MODEL", "").strip() or DEFAULT_STUDY_GUIDE_MODEL

    @staticmethod
    def study_guide_temperature() -> float:
        return _env_float("STUDY_GUIDE_TEMPERATURE", DEFAULT_STUDY_GUIDE_TEMPERATURE)

    @staticmethod
    def study_guide_max_tokens() -> int:
        return _env_int("STUDY_GUIDE_MAX_TOKENS", DEFAULT_STUDY_GUIDE_MAX_TOKENS)

    @staticmethod
    def study_guide_timeout_seconds() -> float:
        value = _env_float("STUDY_GUIDE_TIMEOUT_SECONDS", DEFAULT_STUDY_GUIDE_TIMEOUT_SECONDS)
        return value if value > 0 else DEFAULT_STUDY_GUIDE_TIMEOUT_SECONDS

    @staticmethod
    def study_guides_enabled() -> bool:
        """Feature-flag gate to skip model enrichment entirely."""
        return _env_flag("ENABLE_STUDY_GUIDES", True)

    @staticmethod
    def parallel_study_guides() -> bool:
        return _env_flag("PARALLEL_STUDY_GUIDES", True)

    @staticmethod
    def log_level() -> str:
        return os.getenv("LOG_LEVEL", "DEBUG").strip().upper() or "DEBUG"


settings = Settings()
