from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import pandas as pd

from src.catalog.scholarships import get_catalog
from src.normalize.schema import ScholarshipRecord, StudentProfile
from src.rank.match_score import match_badge, match_score
from src.rank.weights import MatchWeights

RESULT_COLUMNS = [
    "id",
    "name",
    "is_eligible",
    "match_score",
    "match_label",
    "amount",
    "deadline",
    "reasons",
]


@dataclass(frozen=True, slots=True)
class EligibilityResult:
    scholarship: ScholarshipRecord
    is_eligible: bool
    reasons: tuple[str, ...]


def _format_gpa(value: float) -> str:
    return f"{value:g}"


def evaluate(profile: StudentProfile, scholarship: ScholarshipRecord) -> EligibilityResult:
    """Check every requirement in order; a failed criterion never stops the rest."""
    requirements = scholarship.requirements
    reasons: list[str] = []
    is_eligible = True

    if profile.gpa < requirements.min_gpa:
        is_eligible = False
        reasons.append(
            f"GPA must be at least {_format_gpa(requirements.min_gpa)} (you have {_format_gpa(profile.gpa)})"
        )
    else:
        reasons.append(f"✓ Your GPA of {_format_gpa(profile.gpa)} meets the requirement")

    if profile.income not in requirements.income:
        is_eligible = False
        reasons.append("Income level does not match requirements")
    else:
        reasons.append("✓ Income level matches requirements")

    if requirements.open_to_all_courses:
        reasons.append("✓ Open to all fields of study")
    elif requirements.course_matches(profile.course):
        reasons.append("✓ Your field of study matches requirements")
    else:
        is_eligible = False
        reasons.append(f"Field of study must be one of: {', '.join(requirements.courses)}")

    if requirements.has_activity_requirement:
        if requirements.activities_match(profile.activities):
            reasons.append("✓ Your activities match requirements")
        else:
            is_eligible = False
            reasons.append(f"Activities must include: {', '.join(requirements.activities)}")

    return EligibilityResult(scholarship=scholarship, is_eligible=is_eligible, reasons=tuple(reasons))


def find_all(
    profile: StudentProfile,
    catalog: Sequence[ScholarshipRecord] | None = None,
) -> list[EligibilityResult]:
    records = catalog if catalog is not None else get_catalog()
    return [evaluate(profile, scholarship) for scholarship in records]


def partition_results(
    results: Iterable[EligibilityResult],
) -> tuple[list[EligibilityResult], list[EligibilityResult]]:
    eligible: list[EligibilityResult] = []
    not_eligible: list[EligibilityResult] = []
    for result in results:
        (eligible if result.is_eligible else not_eligible).append(result)
    return eligible, not_eligible


def results_to_frame(
    results: Iterable[EligibilityResult],
    profile: StudentProfile,
    weights: MatchWeights | None = None,
) -> pd.DataFrame:
    rows = []
    for result in results:
        score = match_score(profile, result.scholarship, weights)
        rows.append(
            {
                "id": result.scholarship.id,
                "name": result.scholarship.name,
                "is_eligible": result.is_eligible,
                "match_score": score,
                "match_label": match_badge(score).label,
                "amount": result.scholarship.amount,
                "deadline": result.scholarship.deadline,
                "reasons": list(result.reasons),
            }
        )
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)
