from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Sequence

from src.essay.quality import EssayAnalysis
from src.normalize.schema import StudentProfile
from src.rank.eligibility import EligibilityResult
from src.rank.match_score import match_badge, match_score
from src.recommend.remote import RemoteScholarship

ELIGIBLE_LABEL = "✓ Eligible"
NOT_ELIGIBLE_LABEL = "✗ Not Eligible"
NOT_ELIGIBLE_HEADING = "Scholarships you don't qualify for yet:"


@dataclass(frozen=True, slots=True)
class ResultCard:
    name: str
    description: str
    is_eligible: bool
    eligibility_label: str
    reasons: tuple[str, ...]
    amount: str
    deadline: str
    match_score: int | None = None
    match_label: str | None = None
    match_tier: str | None = None

    @property
    def badge_text(self) -> str:
        if self.match_score is None:
            return ""
        return f"{self.match_score}% {self.match_label}"


def format_deadline(value: Any) -> str:
    if value is None:
        return ""
    text = str(value).strip()
    try:
        parsed = date.fromisoformat(text)
    except ValueError:
        return text
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def _eligibility_label(is_eligible: bool) -> str:
    return ELIGIBLE_LABEL if is_eligible else NOT_ELIGIBLE_LABEL


def build_result_cards(results: Iterable[EligibilityResult], profile: StudentProfile) -> list[ResultCard]:
    cards: list[ResultCard] = []
    for result in results:
        scholarship = result.scholarship
        score = match_score(profile, scholarship)
        badge = match_badge(score)
        cards.append(
            ResultCard(
                name=scholarship.name,
                description=scholarship.description,
                is_eligible=result.is_eligible,
                eligibility_label=_eligibility_label(result.is_eligible),
                reasons=result.reasons,
                amount=scholarship.amount,
                deadline=format_deadline(scholarship.deadline),
                match_score=score,
                match_label=badge.label,
                match_tier=badge.tier,
            )
        )
    return cards


def build_remote_cards(recommendations: Iterable[RemoteScholarship]) -> list[ResultCard]:
    return [
        ResultCard(
            name=item.name,
            description=item.description,
            is_eligible=item.is_eligible,
            eligibility_label=_eligibility_label(item.is_eligible),
            reasons=item.reasons,
            amount=item.amount or "Unknown",
            deadline=format_deadline(item.deadline),
        )
        for item in recommendations
    ]


def split_cards(cards: Sequence[ResultCard]) -> tuple[list[ResultCard], list[ResultCard]]:
    return [card for card in cards if card.is_eligible], [card for card in cards if not card.is_eligible]


def eligible_heading(count: int) -> str:
    return f"You qualify for {count} scholarship{'s' if count != 1 else ''}!"


def results_summary(eligible_count: int, not_eligible_count: int) -> str:
    return (
        f"Found {eligible_count} scholarships you qualify for and "
        f"{not_eligible_count} you don't qualify for yet."
    )


def essay_score_text(analysis: EssayAnalysis) -> str:
    return f"{analysis.score}% {analysis.rating}"
