from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from uuid import uuid4

from src.config import DEFAULT_PROFILE_PATH
from src.normalize.schema import StudentProfile

logger = logging.getLogger(__name__)

PROFILE_KEY = "userProfile"


def write_json_atomic(payload: dict[str, Any], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = output_path.parent / f"{output_path.name}.{uuid4().hex}.tmp"
    try:
        temp_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        temp_path.replace(output_path)
    finally:
        if temp_path.exists():
            temp_path.unlink()


@dataclass(slots=True)
class ProfileStore:
    """Holds the last submitted profile; every save replaces the previous one."""

    path: Path = DEFAULT_PROFILE_PATH

    def save(self, profile: StudentProfile) -> Path:
        write_json_atomic({PROFILE_KEY: profile.to_dict()}, self.path)
        logger.debug("Saved student profile to %s", self.path)
        return self.path

    def load(self) -> StudentProfile | None:
        if not self.path.exists():
            return None
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
            return StudentProfile.from_mapping(payload[PROFILE_KEY])
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError):
            logger.warning("Ignoring unreadable student profile at %s", self.path, exc_info=True)
            return None

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
