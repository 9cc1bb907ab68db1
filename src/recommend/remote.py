from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Mapping

from src.normalize.schema import StudentProfile
from src.recommend.http import RecommendationHttpClient

logger = logging.getLogger(__name__)

_ARRAY_LITERAL = re.compile(r"\[[\s\S]*\]")

PROMPT_TEMPLATE = """
Student Profile:
- GPA: {gpa}
- Household Income: {income}
- Field of Study: {course}
- Activities: {activities}

Based on this student profile, please:
1. Identify scholarships they qualify for
2. Explain requirements in simple, clear English
3. List reasons why they qualify or don't qualify
4. Include scholarship amounts and deadlines if available

Please format the response as a JSON array with this structure:
[
  {{
    "name": "Scholarship Name",
    "description": "Brief description",
    "isEligible": true/false,
    "reasons": ["reason 1", "reason 2"],
    "amount": "$X,XXX",
    "deadline": "YYYY-MM-DD"
  }}
]
"""


class RecommendationParseError(ValueError):
    """The endpoint answered, but not with a usable scholarship array."""


@dataclass(frozen=True, slots=True)
class RemoteScholarship:
    name: str
    description: str
    is_eligible: bool
    reasons: tuple[str, ...]
    amount: str
    deadline: str | None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> RemoteScholarship:
        name = str(payload.get("name") or "").strip()
        if not name:
            raise RecommendationParseError("Recommended scholarship is missing a name.")
        reasons = payload.get("reasons") or []
        if isinstance(reasons, str):
            reasons = [reasons]
        if not isinstance(reasons, list):
            raise RecommendationParseError(f"Reasons for '{name}' must be a list.")
        deadline = payload.get("deadline")
        return cls(
            name=name,
            description=str(payload.get("description") or ""),
            is_eligible=payload.get("isEligible", payload.get("is_eligible")) is True,
            reasons=tuple(str(reason) for reason in reasons if str(reason).strip()),
            amount=str(payload.get("amount") or ""),
            deadline=str(deadline) if deadline else None,
        )


def build_prompt(profile: StudentProfile) -> str:
    return PROMPT_TEMPLATE.format(
        gpa=f"{profile.gpa:g}",
        income=profile.income,
        course=profile.course,
        activities=profile.activities or "None specified",
    )


def extract_recommendations(text: str) -> list[RemoteScholarship]:
    match = _ARRAY_LITERAL.search(text or "")
    if match is None:
        raise RecommendationParseError("No JSON array found in recommendation text.")
    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise RecommendationParseError(f"Malformed JSON array in recommendation text: {exc}") from exc

    recommendations: list[RemoteScholarship] = []
    for item in payload:
        if not isinstance(item, Mapping):
            raise RecommendationParseError("Recommendation entries must be JSON objects.")
        recommendations.append(RemoteScholarship.from_mapping(item))
    return recommendations


@dataclass(slots=True)
class RemoteRecommender:
    api_url: str
    http_client: RecommendationHttpClient

    def fetch(self, profile: StudentProfile) -> list[RemoteScholarship]:
        body = self.http_client.post_json(self.api_url, {"question": build_prompt(profile)})
        if not isinstance(body, Mapping) or not isinstance(body.get("text"), str):
            raise RecommendationParseError("Recommendation response has no 'text' field.")
        recommendations = extract_recommendations(body["text"])
        logger.info("Remote recommender returned %d scholarships", len(recommendations))
        return recommendations
