from __future__ import annotations

from src.recommend.http import RecommendationHttpClient
from src.recommend.remote import RecommendationParseError, RemoteRecommender, RemoteScholarship, build_prompt, extract_recommendations
from src.recommend.service import OFFLINE_NOTICE, RecommendationOutcome, build_recommender, recommend

__all__ = [
    "OFFLINE_NOTICE",
    "RecommendationHttpClient",
    "RecommendationOutcome",
    "RecommendationParseError",
    "RemoteRecommender",
    "RemoteScholarship",
    "build_prompt",
    "build_recommender",
    "extract_recommendations",
    "recommend",
]
