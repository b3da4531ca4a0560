"""Configuration for the navigation service.

Settings are read once from the environment (and a project ``.env`` file)
and cached for the life of the process.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, TypeVar

from dotenv import load_dotenv
from pydantic import BaseModel, Field

_config_logger = logging.getLogger(__name__)


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Python logging level name")


class EventSettings(BaseModel):
    capacity: int = Field(default=100, ge=1)
    forward_enabled: bool = True
    sink_base_url: str = "citibankdemobusiness.dev"
    max_forward_latency_ms: int = Field(default=50, ge=1)


class PolicySettings(BaseModel):
    privileged_roles: List[str] = ["privileged-user", "admin"]
    restricted_regions: List[str] = ["EU"]
    regulated_operations: List[str] = ["navigation-data-processing"]
    authorization_pass_rate: float = Field(default=0.8, ge=0.0, le=1.0)
    regional_pass_rate: float = Field(default=0.9, ge=0.0, le=1.0)


class RulesSettings(BaseModel):
    new_navigation_load_threshold: float = Field(default=0.9, ge=0.0, le=1.0)
    load_history_size: int = Field(default=20, ge=1)


class ReasoningSettings(BaseModel):
    model: str = "gemini-3-flash-preview"
    api_key: Optional[str] = None
    timeout_seconds: float = Field(default=15.0, gt=0)


class Settings(BaseModel):
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    events: EventSettings = Field(default_factory=EventSettings)
    policy: PolicySettings = Field(default_factory=PolicySettings)
    rules: RulesSettings = Field(default_factory=RulesSettings)
    reasoning: ReasoningSettings = Field(default_factory=ReasoningSettings)


_Number = TypeVar("_Number", int, float)

_TRUE_VALUES = frozenset({"1", "true", "yes"})


def _project_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _split_csv(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_number(key: str, default: _Number) -> _Number:
    """Read an int or float env var, keeping ``default`` on blank or bad input."""
    raw = (os.getenv(key) or "").strip()
    if not raw:
        return default
    cast = type(default)
    try:
        return cast(raw)
    except ValueError:
        _config_logger.warning("Ignoring %s=%r: not a valid %s", key, raw, cast.__name__)
        return default
    try:
        return float(value)
    except ValueError:
        _config_logger.warning(
            "Invalid float value for %s: %r, using default %s", key, value, default
        )
        return default


def load_settings() -> Settings:
    """Load configuration and cache the result."""
    return _load_settings_cached()


@lru_cache(maxsize=1)
def _load_settings_cached() -> Settings:
    load_dotenv(dotenv_path=_project_root() / ".env")

    events = EventSettings()
    policy = PolicySettings()
    rules = RulesSettings()
    reasoning = ReasoningSettings()

    return Settings.model_validate({
        "logging": {
            "level": os.getenv("LOG_LEVEL", LoggingSettings().level),
        },
        "events": {
            "capacity": _env_number("EVENT_LOG_CAPACITY", events.capacity),
            "forward_enabled": _env_bool("EVENT_FORWARD_ENABLED", events.forward_enabled),
            "sink_base_url": os.getenv("EVENT_SINK_BASE_URL", events.sink_base_url),
            "max_forward_latency_ms": _env_number(
                "EVENT_FORWARD_MAX_LATENCY_MS", events.max_forward_latency_ms
            ),
        },
        "policy": {
            "privileged_roles": (
                _split_csv(os.getenv("POLICY_PRIVILEGED_ROLES")) or policy.privileged_roles
            ),
            "restricted_regions": (
                _split_csv(os.getenv("POLICY_RESTRICTED_REGIONS")) or policy.restricted_regions
            ),
            "regulated_operations": policy.regulated_operations,
            "authorization_pass_rate": _env_number(
                "POLICY_AUTHORIZATION_PASS_RATE", policy.authorization_pass_rate
            ),
            "regional_pass_rate": _env_number(
                "POLICY_REGIONAL_PASS_RATE", policy.regional_pass_rate
            ),
        },
        "rules": {
            "new_navigation_load_threshold": _env_number(
                "RULES_NEW_NAVIGATION_LOAD_THRESHOLD", rules.new_navigation_load_threshold
            ),
            "load_history_size": _env_number("RULES_LOAD_HISTORY_SIZE", rules.load_history_size),
        },
        "reasoning": {
            "model": os.getenv("REASONING_MODEL", reasoning.model),
            "api_key": os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or None,
            "timeout_seconds": _env_number(
                "REASONING_TIMEOUT_SECONDS", reasoning.timeout_seconds
            ),
        },
    })
