from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

ALL_COURSES = "all"
INCOME_BRACKETS = ("low", "medium", "high")
MIN_GPA = 0.0
MAX_GPA = 4.0


def _as_tuple(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        cleaned = value.strip()
        return (cleaned,) if cleaned else ()
    if isinstance(value, Iterable):
        return tuple(str(item).strip() for item in value if str(item).strip())
    return ()


def contains_any_keyword(text: str | None, keywords: Iterable[str]) -> bool:
    """Case-insensitive substring match of any keyword against free text."""
    haystack = (text or "").lower()
    return any(keyword.lower() in haystack for keyword in keywords)


@dataclass(frozen=True, slots=True)
class StudentProfile:
    gpa: float
    income: str
    course: str
    activities: str = ""

    def __post_init__(self) -> None:
        gpa = float(self.gpa)
        if not math.isfinite(gpa) or gpa < MIN_GPA or gpa > MAX_GPA:
            raise ValueError(f"GPA must be between {MIN_GPA} and {MAX_GPA} (received {self.gpa!r}).")
        if self.income not in INCOME_BRACKETS:
            raise ValueError(f"Income must be one of {', '.join(INCOME_BRACKETS)} (received {self.income!r}).")
        object.__setattr__(self, "gpa", gpa)
        object.__setattr__(self, "activities", self.activities or "")

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> StudentProfile:
        return cls(
            gpa=float(payload["gpa"]),
            income=str(payload["income"]),
            course=str(payload.get("course") or ""),
            activities=str(payload.get("activities") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "gpa": self.gpa,
            "income": self.income,
            "course": self.course,
            "activities": self.activities,
        }


@dataclass(frozen=True, slots=True)
class ScholarshipRequirements:
    min_gpa: float
    income: tuple[str, ...]
    courses: tuple[str, ...] = (ALL_COURSES,)
    activities: tuple[str, ...] = ()

    @property
    def open_to_all_courses(self) -> bool:
        return bool(self.courses) and self.courses[0] == ALL_COURSES

    @property
    def has_activity_requirement(self) -> bool:
        return len(self.activities) > 0

    def course_matches(self, course: str) -> bool:
        if self.open_to_all_courses:
            return True
        return contains_any_keyword(course, self.courses)

    def activities_match(self, activities: str) -> bool:
        if not self.has_activity_requirement:
            return True
        return contains_any_keyword(activities, self.activities)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> ScholarshipRequirements:
        min_gpa = payload.get("min_gpa", payload.get("minGPA"))
        if min_gpa is None:
            raise ValueError("Scholarship requirements need a minimum GPA.")
        return cls(
            min_gpa=float(min_gpa),
            income=_as_tuple(payload.get("income")),
            courses=_as_tuple(payload.get("courses")) or (ALL_COURSES,),
            activities=_as_tuple(payload.get("activities")),
        )


@dataclass(frozen=True, slots=True)
class ScholarshipRecord:
    """A catalog entry. `amount` is a display string, `deadline` an ISO date."""

    id: int
    name: str
    description: str
    requirements: ScholarshipRequirements = field(repr=False)
    amount: str
    deadline: str

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> ScholarshipRecord:
        return cls(
            id=int(payload["id"]),
            name=str(payload["name"]),
            description=str(payload.get("description") or ""),
            requirements=ScholarshipRequirements.from_mapping(payload.get("requirements") or {}),
            amount=str(payload.get("amount") or ""),
            deadline=str(payload.get("deadline") or ""),
        )
