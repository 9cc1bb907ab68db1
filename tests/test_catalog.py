from __future__ import annotations

import json
from pathlib import Path

import pytest

from src.catalog.scholarships import catalog_to_frame, get_catalog, get_scholarship, load_catalog
from src.normalize.schema import ALL_COURSES


def test_builtin_catalog_has_six_records_in_id_order() -> None:
    catalog = get_catalog()

    assert [record.id for record in catalog] == [1, 2, 3, 4, 5, 6]
    assert get_scholarship(3).name == "STEM Future Leaders Grant"
    assert get_scholarship(3).requirements.min_gpa == 3.0
    with pytest.raises(KeyError):
        get_scholarship(99)


def test_catalog_to_frame_exposes_requirements() -> None:
    frame = catalog_to_frame()

    assert len(frame) == 6
    assert frame.loc[frame["id"] == 2, "income"].iloc[0] == ["low", "medium"]
    assert frame["min_gpa"].max() == 3.5


def test_load_catalog_accepts_camel_case_requirements(tmp_path: Path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": 10,
                    "name": "Local Arts Prize",
                    "description": "For painters",
                    "requirements": {"minGPA": 2.2, "income": ["low"], "activities": ["painting"]},
                    "amount": "$500",
                    "deadline": "2026-09-01",
                }
            ]
        ),
        encoding="utf-8",
    )

    (record,) = load_catalog(path)

    assert record.requirements.min_gpa == 2.2
    assert record.requirements.courses == (ALL_COURSES,)
    assert record.requirements.activities == ("painting",)


def test_load_catalog_rejects_bad_payloads(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_catalog(tmp_path / "missing.json")

    not_a_list = tmp_path / "object.json"
    not_a_list.write_text(json.dumps({"id": 1}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_catalog(not_a_list)

    duplicate = tmp_path / "duplicate.json"
    entry = {"id": 1, "name": "A", "requirements": {"min_gpa": 2.0, "income": ["low"]}}
    duplicate.write_text(json.dumps([entry, entry]), encoding="utf-8")
    with pytest.raises(ValueError, match="Duplicate"):
        load_catalog(duplicate)
