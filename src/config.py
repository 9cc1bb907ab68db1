from __future__ import annotations

import math
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

ROOT_DIR = Path(__file__).resolve().parents[1]
PROCESSED_DIR = ROOT_DIR / "data" / "processed"

DEFAULT_API_URL = (
    "https://flowise-production-ad0b.up.railway.app/api/v1/prediction/"
    "6a5712e1-6ff9-48e7-baee-c7b9c64866b4"
)
DEFAULT_USER_AGENT = "ScholarshipFinder/0.1 (+https://localhost; contact=local)"
DEFAULT_PROFILE_PATH = PROCESSED_DIR / "student_profile.json"

ENV_PREFIX = "SCHOLARSHIP_FINDER_"
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def _parse_bool(value: Any, *, name: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"Setting '{name}' must be a boolean (received {value!r}).")


@dataclass(frozen=True, slots=True)
class AppSettings:
    api_url: str = DEFAULT_API_URL
    remote_enabled: bool = True
    request_timeout_seconds: float = 20.0
    user_agent: str = DEFAULT_USER_AGENT
    profile_path: Path = DEFAULT_PROFILE_PATH

    def __post_init__(self) -> None:
        timeout = float(self.request_timeout_seconds)
        if not math.isfinite(timeout) or timeout <= 0.0:
            raise ValueError("Setting 'request_timeout_seconds' must be a positive number.")
        if self.remote_enabled and not self.api_url.strip():
            raise ValueError("Setting 'api_url' is required when the remote recommender is enabled.")

    @classmethod
    def defaults(cls) -> AppSettings:
        return cls()

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> AppSettings:
        values = payload or {}
        baseline = cls.defaults()
        return cls(
            api_url=str(values.get("api_url", baseline.api_url)),
            remote_enabled=_parse_bool(values.get("remote_enabled", baseline.remote_enabled), name="remote_enabled"),
            request_timeout_seconds=float(
                values.get("request_timeout_seconds", baseline.request_timeout_seconds)
            ),
            user_agent=str(values.get("user_agent", baseline.user_agent)),
            profile_path=Path(values.get("profile_path", baseline.profile_path)),
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppSettings:
        env = os.environ if environ is None else environ
        keys = {
            "api_url": "API_URL",
            "remote_enabled": "REMOTE",
            "request_timeout_seconds": "TIMEOUT_SECONDS",
            "user_agent": "USER_AGENT",
            "profile_path": "PROFILE_PATH",
        }
        payload = {
            setting: env[f"{ENV_PREFIX}{suffix}"]
            for setting, suffix in keys.items()
            if f"{ENV_PREFIX}{suffix}" in env
        }
        return cls.from_mapping(payload)

    def with_overrides(self, **overrides: Any) -> AppSettings:
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})
