from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

import pandas as pd

from src.normalize.schema import ALL_COURSES, ScholarshipRecord, ScholarshipRequirements

logger = logging.getLogger(__name__)

_ALL_BRACKETS = ("low", "medium", "high")

SCHOLARSHIPS: tuple[ScholarshipRecord, ...] = (
    ScholarshipRecord(
        id=1,
        name="Merit Excellence Scholarship",
        description="For high-achieving students with outstanding academic performance",
        requirements=ScholarshipRequirements(
            min_gpa=3.5,
            income=_ALL_BRACKETS,
            courses=(ALL_COURSES,),
            activities=(),
        ),
        amount="$5,000",
        deadline="2026-03-15",
    ),
    ScholarshipRecord(
        id=2,
        name="Community Service Award",
        description="For students dedicated to community service and volunteering",
        requirements=ScholarshipRequirements(
            min_gpa=2.5,
            income=("low", "medium"),
            courses=(ALL_COURSES,),
            activities=("community service", "volunteering", "volunteer"),
        ),
        amount="$3,000",
        deadline="2026-04-01",
    ),
    ScholarshipRecord(
        id=3,
        name="STEM Future Leaders Grant",
        description="Supporting students pursuing careers in Science, Technology, Engineering, or Math",
        requirements=ScholarshipRequirements(
            min_gpa=3.0,
            income=_ALL_BRACKETS,
            courses=(
                "computer science",
                "engineering",
                "mathematics",
                "physics",
                "chemistry",
                "biology",
                "technology",
            ),
            activities=(),
        ),
        amount="$7,500",
        deadline="2026-02-28",
    ),
    ScholarshipRecord(
        id=4,
        name="First Generation College Student Scholarship",
        description="For students who are the first in their family to attend college",
        requirements=ScholarshipRequirements(
            min_gpa=2.0,
            income=("low", "medium"),
            courses=(ALL_COURSES,),
            activities=(),
        ),
        amount="$4,000",
        deadline="2026-05-15",
    ),
    ScholarshipRecord(
        id=5,
        name="Athletic Achievement Scholarship",
        description="For student-athletes who excel in sports and academics",
        requirements=ScholarshipRequirements(
            min_gpa=2.8,
            income=_ALL_BRACKETS,
            courses=(ALL_COURSES,),
            activities=(
                "basketball",
                "football",
                "soccer",
                "track",
                "swimming",
                "sports",
                "athletic",
                "team",
            ),
        ),
        amount="$6,000",
        deadline="2026-03-30",
    ),
    ScholarshipRecord(
        id=6,
        name="Women in Business Scholarship",
        description="Empowering women pursuing business and entrepreneurship",
        requirements=ScholarshipRequirements(
            min_gpa=3.2,
            income=_ALL_BRACKETS,
            courses=("business", "commerce", "finance", "accounting", "entrepreneurship", "marketing"),
            activities=(),
        ),
        amount="$5,500",
        deadline="2026-04-20",
    ),
)


def get_catalog() -> tuple[ScholarshipRecord, ...]:
    return SCHOLARSHIPS


def get_scholarship(scholarship_id: int, catalog: Sequence[ScholarshipRecord] | None = None) -> ScholarshipRecord:
    for record in catalog or SCHOLARSHIPS:
        if record.id == scholarship_id:
            return record
    raise KeyError(f"No scholarship with id {scholarship_id}.")


def build_catalog(payload: Iterable[Mapping[str, Any]]) -> tuple[ScholarshipRecord, ...]:
    records = tuple(ScholarshipRecord.from_mapping(item) for item in payload)
    seen: set[int] = set()
    for record in records:
        if record.id in seen:
            raise ValueError(f"Duplicate scholarship id {record.id} in catalog.")
        seen.add(record.id)
    return records


def load_catalog(path: Path) -> tuple[ScholarshipRecord, ...]:
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise ValueError(f"Catalog file {path} must contain a JSON array of scholarships.")
    catalog = build_catalog(payload)
    logger.info("Loaded %d scholarships from %s", len(catalog), path)
    return catalog


def catalog_to_frame(catalog: Sequence[ScholarshipRecord] | None = None) -> pd.DataFrame:
    rows = [
        {
            "id": record.id,
            "name": record.name,
            "amount": record.amount,
            "deadline": record.deadline,
            "min_gpa": record.requirements.min_gpa,
            "income": list(record.requirements.income),
            "courses": list(record.requirements.courses),
            "activities": list(record.requirements.activities),
        }
        for record in (catalog if catalog is not None else SCHOLARSHIPS)
    ]
    return pd.DataFrame(rows, columns=["id", "name", "amount", "deadline", "min_gpa", "income", "courses", "activities"])
