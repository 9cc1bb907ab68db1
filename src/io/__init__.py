"""Persistence for the last submitted student profile."""

from src.io.profile_store import PROFILE_KEY, ProfileStore, write_json_atomic

__all__ = ["PROFILE_KEY", "ProfileStore", "write_json_atomic"]
