from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

_POINT_FIELDS = (
    "gpa_max",
    "gpa_base",
    "gpa_bonus_per_point",
    "gpa_penalty_per_point",
    "income",
    "course",
    "activities",
    "activities_partial",
)


@dataclass(frozen=True, slots=True)
class MatchWeights:
    """Point table for the match score.

    `gpa_base` is awarded exactly at the scholarship minimum; each GPA point above
    it adds `gpa_bonus_per_point` up to `gpa_max`, each point below removes
    `gpa_penalty_per_point` down to zero. `activities_partial` is the credit given
    when an activity requirement exists but is not met.
    """

    gpa_max: float
    gpa_base: float
    gpa_bonus_per_point: float
    gpa_penalty_per_point: float
    income: float
    course: float
    activities: float
    activities_partial: float

    def __post_init__(self) -> None:
        for field_name in _POINT_FIELDS:
            value = float(getattr(self, field_name))
            if not math.isfinite(value):
                raise ValueError(f"Match weight '{field_name}' must be finite.")
            if value < 0.0:
                raise ValueError(f"Match weight '{field_name}' must not be negative.")

        if self.gpa_base > self.gpa_max:
            raise ValueError("Match weight 'gpa_base' must not exceed 'gpa_max'.")
        if self.activities_partial > self.activities:
            raise ValueError("Match weight 'activities_partial' must not exceed 'activities'.")
        if self.max_total <= 0.0:
            raise ValueError("Match weights must award at least one point in total.")

    @property
    def max_total(self) -> float:
        return self.gpa_max + self.income + self.course + self.activities

    @classmethod
    def baseline(cls) -> MatchWeights:
        return cls(
            gpa_max=40.0,
            gpa_base=30.0,
            gpa_bonus_per_point=10.0,
            gpa_penalty_per_point=15.0,
            income=20.0,
            course=25.0,
            activities=15.0,
            activities_partial=5.0,
        )

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> MatchWeights:
        values = payload or {}
        baseline = cls.baseline()
        return cls(**{name: float(values.get(name, getattr(baseline, name))) for name in _POINT_FIELDS})

    def to_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in _POINT_FIELDS}
