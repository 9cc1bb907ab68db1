from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from src.normalize.schema import INCOME_BRACKETS, MAX_GPA, MIN_GPA, StudentProfile

MIN_COURSE_LENGTH = 2

GPA_REQUIRED = "GPA is required"
GPA_OUT_OF_RANGE = "GPA must be between 0.0 and 4.0"
INCOME_REQUIRED = "Please select an income range"
COURSE_REQUIRED = "Please enter your field of study"
COURSE_TOO_SHORT = "Field of study must be at least 2 characters"


class ProfileValidationError(ValueError):
    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        joined = "; ".join(f"{name}: {message}" for name, message in self.errors.items())
        super().__init__(f"Invalid student profile ({joined}).")


@dataclass(slots=True)
class FormValidation:
    profile: StudentProfile | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return self.profile is not None and not self.errors


def _coerce_gpa(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(numeric):
        return None
    return numeric


def validate_gpa(value: Any) -> str | None:
    gpa = _coerce_gpa(value)
    if gpa is None:
        return GPA_REQUIRED
    if gpa < MIN_GPA or gpa > MAX_GPA or math.isinf(gpa):
        return GPA_OUT_OF_RANGE
    return None


def validate_income(value: Any) -> str | None:
    if not value or str(value) not in INCOME_BRACKETS:
        return INCOME_REQUIRED
    return None


def validate_course(value: Any) -> str | None:
    course = str(value or "").strip()
    if not course:
        return COURSE_REQUIRED
    if len(course) < MIN_COURSE_LENGTH:
        return COURSE_TOO_SHORT
    return None


def validate_profile_form(
    gpa: Any,
    income: Any,
    course: Any,
    activities: Any = "",
) -> FormValidation:
    errors: dict[str, str] = {}
    for name, message in (
        ("gpa", validate_gpa(gpa)),
        ("income", validate_income(income)),
        ("course", validate_course(course)),
    ):
        if message:
            errors[name] = message

    if errors:
        return FormValidation(profile=None, errors=errors)

    profile = StudentProfile(
        gpa=_coerce_gpa(gpa),
        income=str(income),
        course=str(course).strip(),
        activities=str(activities or "").strip(),
    )
    return FormValidation(profile=profile)


def require_valid_profile(
    gpa: Any,
    income: Any,
    course: Any,
    activities: Any = "",
) -> StudentProfile:
    validation = validate_profile_form(gpa, income, course, activities)
    if validation.profile is None:
        raise ProfileValidationError(validation.errors)
    return validation.profile
