from __future__ import annotations

import math
from dataclasses import dataclass

from src.normalize.schema import ScholarshipRecord, StudentProfile
from src.rank.weights import MatchWeights

EXCELLENT_MATCH_THRESHOLD = 80
GOOD_MATCH_THRESHOLD = 60


@dataclass(frozen=True, slots=True)
class MatchBreakdown:
    gpa: float
    income: float
    course: float
    activities: float
    total: int

    @property
    def points(self) -> float:
        return self.gpa + self.income + self.course + self.activities


@dataclass(frozen=True, slots=True)
class MatchBadge:
    label: str
    tier: str


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def gpa_points(gpa: float, min_gpa: float, weights: MatchWeights | None = None) -> float:
    table = weights or MatchWeights.baseline()
    if gpa >= min_gpa:
        excess = gpa - min_gpa
        return min(table.gpa_max, table.gpa_base + excess * table.gpa_bonus_per_point)
    deficit = min_gpa - gpa
    return max(0.0, table.gpa_base - deficit * table.gpa_penalty_per_point)


def income_points(profile: StudentProfile, scholarship: ScholarshipRecord, weights: MatchWeights | None = None) -> float:
    table = weights or MatchWeights.baseline()
    return table.income if profile.income in scholarship.requirements.income else 0.0


def course_points(profile: StudentProfile, scholarship: ScholarshipRecord, weights: MatchWeights | None = None) -> float:
    table = weights or MatchWeights.baseline()
    return table.course if scholarship.requirements.course_matches(profile.course) else 0.0


def activity_points(profile: StudentProfile, scholarship: ScholarshipRecord, weights: MatchWeights | None = None) -> float:
    table = weights or MatchWeights.baseline()
    requirements = scholarship.requirements
    if not requirements.has_activity_requirement:
        return table.activities
    if requirements.activities_match(profile.activities):
        return table.activities
    return table.activities_partial


def match_breakdown(
    profile: StudentProfile,
    scholarship: ScholarshipRecord,
    weights: MatchWeights | None = None,
) -> MatchBreakdown:
    table = weights or MatchWeights.baseline()
    gpa = gpa_points(profile.gpa, scholarship.requirements.min_gpa, table)
    income = income_points(profile, scholarship, table)
    course = course_points(profile, scholarship, table)
    activities = activity_points(profile, scholarship, table)
    total = round_half_up((gpa + income + course + activities) * 100 / table.max_total)
    return MatchBreakdown(gpa=gpa, income=income, course=course, activities=activities, total=total)


def match_score(
    profile: StudentProfile,
    scholarship: ScholarshipRecord,
    weights: MatchWeights | None = None,
) -> int:
    return match_breakdown(profile, scholarship, weights).total


def match_badge(score: int) -> MatchBadge:
    if score >= EXCELLENT_MATCH_THRESHOLD:
        return MatchBadge(label="Excellent Match", tier="high")
    if score >= GOOD_MATCH_THRESHOLD:
        return MatchBadge(label="Good Match", tier="medium")
    return MatchBadge(label="Low Match", tier="low")
