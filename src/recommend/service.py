from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

import requests

from src.config import AppSettings
from src.normalize.schema import ScholarshipRecord, StudentProfile
from src.rank.eligibility import EligibilityResult, find_all
from src.recommend.http import RecommendationHttpClient
from src.recommend.remote import RecommendationParseError, RemoteRecommender, RemoteScholarship

logger = logging.getLogger(__name__)

OFFLINE_NOTICE = "Using offline data. AI features may be limited."

SOURCE_REMOTE = "remote"
SOURCE_LOCAL = "local"


@dataclass(frozen=True, slots=True)
class RecommendationOutcome:
    source: str
    local_results: tuple[EligibilityResult, ...] = ()
    remote_results: tuple[RemoteScholarship, ...] = ()
    notice: str | None = None

    @property
    def used_fallback(self) -> bool:
        return self.notice is not None

    @property
    def eligible_count(self) -> int:
        if self.source == SOURCE_REMOTE:
            return sum(1 for item in self.remote_results if item.is_eligible)
        return sum(1 for item in self.local_results if item.is_eligible)


def build_recommender(settings: AppSettings) -> RemoteRecommender | None:
    if not settings.remote_enabled:
        return None
    http_client = RecommendationHttpClient(
        timeout_seconds=settings.request_timeout_seconds,
        user_agent=settings.user_agent,
    )
    return RemoteRecommender(api_url=settings.api_url, http_client=http_client)


def recommend(
    profile: StudentProfile,
    *,
    recommender: RemoteRecommender | None = None,
    catalog: Sequence[ScholarshipRecord] | None = None,
) -> RecommendationOutcome:
    """Ask the remote recommender once, falling back to the local catalog on any failure."""
    if recommender is None:
        return RecommendationOutcome(source=SOURCE_LOCAL, local_results=tuple(find_all(profile, catalog)))

    try:
        remote_results = recommender.fetch(profile)
    except (requests.RequestException, RecommendationParseError, ValueError):
        logger.warning("Remote recommendation failed; using local catalog.", exc_info=True)
        return RecommendationOutcome(
            source=SOURCE_LOCAL,
            local_results=tuple(find_all(profile, catalog)),
            notice=OFFLINE_NOTICE,
        )

    return RecommendationOutcome(source=SOURCE_REMOTE, remote_results=tuple(remote_results))
