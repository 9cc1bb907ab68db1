from __future__ import annotations

import json
from pathlib import Path

from src.io.profile_store import PROFILE_KEY, ProfileStore
from src.normalize.schema import StudentProfile


def test_save_then_load_round_trips_exact_fields(tmp_path: Path) -> None:
    store = ProfileStore(path=tmp_path / "processed" / "student_profile.json")
    profile = StudentProfile(gpa=3.85, income="low", course="Nursing", activities="hospital volunteer")

    store.save(profile)

    assert store.load() == profile
    persisted = json.loads(store.path.read_text(encoding="utf-8"))
    assert persisted == {
        PROFILE_KEY: {
            "gpa": 3.85,
            "income": "low",
            "course": "Nursing",
            "activities": "hospital volunteer",
        }
    }


def test_save_overwrites_previous_profile(tmp_path: Path) -> None:
    store = ProfileStore(path=tmp_path / "student_profile.json")
    store.save(StudentProfile(gpa=2.0, income="high", course="Art"))
    latest = StudentProfile(gpa=3.1, income="medium", course="Physics", activities="")

    store.save(latest)

    assert store.load() == latest
    assert [path.name for path in tmp_path.iterdir()] == ["student_profile.json"]


def test_load_returns_none_when_missing_or_unreadable(tmp_path: Path) -> None:
    store = ProfileStore(path=tmp_path / "student_profile.json")
    assert store.load() is None

    store.path.write_text("{not json", encoding="utf-8")
    assert store.load() is None

    store.path.write_text(json.dumps({PROFILE_KEY: {"gpa": 9, "income": "low"}}), encoding="utf-8")
    assert store.load() is None


def test_clear_removes_saved_profile(tmp_path: Path) -> None:
    store = ProfileStore(path=tmp_path / "student_profile.json")
    store.save(StudentProfile(gpa=3.0, income="low", course="History"))

    store.clear()

    assert store.load() is None
