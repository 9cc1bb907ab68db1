from __future__ import annotations

from typing import Any

import pytest
import requests

from src.normalize.schema import StudentProfile
from src.recommend.http import RecommendationHttpClient
from src.recommend.remote import (
    RecommendationParseError,
    RemoteRecommender,
    RemoteScholarship,
    build_prompt,
    extract_recommendations,
)
from src.recommend.service import OFFLINE_NOTICE, SOURCE_LOCAL, SOURCE_REMOTE, recommend

PROFILE = StudentProfile(gpa=3.6, income="medium", course="Computer Science", activities="debate club")

REMOTE_TEXT = """Here are your matches:
[
  {
    "name": "Tech Futures Grant",
    "description": "For computing majors.",
    "isEligible": true,
    "reasons": ["GPA meets the 3.0 minimum"],
    "amount": "$4,000",
    "deadline": "2026-04-01"
  },
  {"name": "Rural Scholars Award", "isEligible": false, "reasons": "Requires rural residency"}
]
Good luck!"""


class _FakeHttpClient:
    def __init__(self, body: Any) -> None:
        self.body = body
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def post_json(self, url: str, payload: dict[str, Any]) -> Any:
        self.calls.append((url, payload))
        return self.body


class _FailingRecommender:
    def __init__(self, error: Exception) -> None:
        self.error = error

    def fetch(self, profile: StudentProfile) -> list[RemoteScholarship]:
        raise self.error


def test_extract_recommendations_reads_embedded_array() -> None:
    recommendations = extract_recommendations(REMOTE_TEXT)

    assert [item.name for item in recommendations] == ["Tech Futures Grant", "Rural Scholars Award"]
    assert recommendations[0].is_eligible is True
    assert recommendations[0].deadline == "2026-04-01"
    assert recommendations[1].is_eligible is False
    assert recommendations[1].reasons == ("Requires rural residency",)
    assert recommendations[1].amount == ""
    assert recommendations[1].deadline is None


@pytest.mark.parametrize(
    "text",
    [
        "Sorry, I cannot help with that.",
        "[{'name': 'single quoted'}]",
        "[1, 2, 3]",
        '[{"description": "no name"}]',
    ],
)
def test_extract_recommendations_rejects_unusable_text(text: str) -> None:
    with pytest.raises(RecommendationParseError):
        extract_recommendations(text)


def test_build_prompt_embeds_profile_fields() -> None:
    prompt = build_prompt(PROFILE)

    assert "- GPA: 3.6" in prompt
    assert "- Household Income: medium" in prompt
    assert "- Field of Study: Computer Science" in prompt
    assert "- Activities: debate club" in prompt
    assert '"isEligible": true/false' in prompt

    no_activities = build_prompt(StudentProfile(gpa=3.0, income="low", course="Art"))
    assert "- Activities: None specified" in no_activities


def test_remote_recommender_posts_question_and_parses_text() -> None:
    http_client = _FakeHttpClient({"text": REMOTE_TEXT})
    recommender = RemoteRecommender(api_url="https://example.com/predict", http_client=http_client)

    recommendations = recommender.fetch(PROFILE)

    assert len(recommendations) == 2
    (url, payload), = http_client.calls
    assert url == "https://example.com/predict"
    assert list(payload) == ["question"]
    assert "GPA: 3.6" in payload["question"]


def test_remote_recommender_requires_text_field() -> None:
    recommender = RemoteRecommender(api_url="https://example.com/predict", http_client=_FakeHttpClient({"answer": "[]"}))

    with pytest.raises(RecommendationParseError):
        recommender.fetch(PROFILE)


def test_recommend_without_recommender_uses_local_catalog_silently() -> None:
    outcome = recommend(PROFILE)

    assert outcome.source == SOURCE_LOCAL
    assert outcome.notice is None
    assert outcome.used_fallback is False
    assert len(outcome.local_results) == 6
    assert outcome.eligible_count == 3


@pytest.mark.parametrize(
    "error",
    [
        requests.ConnectionError("offline"),
        requests.Timeout("slow"),
        requests.HTTPError("500 Server Error"),
        RecommendationParseError("no array"),
        ValueError("not json"),
    ],
)
def test_recommend_falls_back_to_local_catalog_on_failure(error: Exception) -> None:
    outcome = recommend(PROFILE, recommender=_FailingRecommender(error))

    assert outcome.source == SOURCE_LOCAL
    assert outcome.notice == OFFLINE_NOTICE
    assert outcome.used_fallback is True
    assert [result.scholarship.id for result in outcome.local_results] == [1, 2, 3, 4, 5, 6]
    assert outcome.remote_results == ()


def test_recommend_returns_remote_results_when_available() -> None:
    recommender = RemoteRecommender(api_url="https://example.com/predict", http_client=_FakeHttpClient({"text": REMOTE_TEXT}))

    outcome = recommend(PROFILE, recommender=recommender)

    assert outcome.source == SOURCE_REMOTE
    assert outcome.notice is None
    assert outcome.local_results == ()
    assert outcome.eligible_count == 1


def _response(status_code: int, content: bytes) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = content
    response.encoding = "utf-8"
    response.url = "https://example.com/predict"
    return response


def test_http_client_makes_single_attempt() -> None:
    with RecommendationHttpClient(timeout_seconds=2.0) as client:
        adapter = client._session.get_adapter("https://example.com/predict")
        assert adapter.max_retries.total == 0
        assert client.timeout_tuple == (2.0, 2.0)


def test_http_client_raises_on_error_status(monkeypatch: pytest.MonkeyPatch) -> None:
    client = RecommendationHttpClient()
    calls: list[dict[str, Any]] = []

    def fake_request(**kwargs: Any) -> requests.Response:
        calls.append(kwargs)
        return _response(500, b"upstream failure")

    monkeypatch.setattr(client._session, "request", fake_request)

    with pytest.raises(requests.HTTPError):
        client.post_json("https://example.com/predict", {"question": "hi"})
    assert len(calls) == 1
    assert calls[0]["method"] == "POST"
    assert calls[0]["json"] == {"question": "hi"}
    client.close()


def test_http_client_rejects_non_json_body(monkeypatch: pytest.MonkeyPatch) -> None:
    client = RecommendationHttpClient()
    monkeypatch.setattr(client._session, "request", lambda **kwargs: _response(200, b"<html>oops</html>"))

    with pytest.raises(ValueError):
        client.post_json("https://example.com/predict", {"question": "hi"})
    client.close()
