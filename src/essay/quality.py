"""Rubric-based essay quality scorer.

Six criteria are scored independently, each in three (or two) fixed tiers:

    length           15 / 8 / 10
    personal voice   20 / 12 / 5
    specificity      20 / 12 / 5
    goals            20 / 12 / 5
    structure        15 / 10 / 5
    passion          10 / 5

The points add up to at most 100, so the total is already a percentage.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable

from src.essay.text_stats import average_sentence_length, split_paragraphs, word_count

MIN_ESSAY_CHARS = 100
MAX_SCORE = 100

IDEAL_MIN_WORDS = 250
IDEAL_MAX_WORDS = 650

POSITIVE = "positive"
WARNING = "warning"
NEGATIVE = "negative"

_PERSONAL = re.compile(
    r"\b(?:i|my|me|myself|when i|i was|i am|i have|my family|my experience)\b", re.IGNORECASE
)
_STORY = re.compile(r"\b(?:when|during|after|before|while|once|remember)\b", re.IGNORECASE)
_SPECIFIC = re.compile(
    r"\b(?:\d+|specific|for example|such as|including|particularly|specifically|named)\b",
    re.IGNORECASE,
)
_VAGUE = re.compile(r"\b(?:good|nice|great|many|some|things|stuff|very|really)\b", re.IGNORECASE)
_GOALS = re.compile(
    r"\b(?:goal|aspire|plan|aim|hope|dream|future|will|career|contribute|impact|change|help|serve)\b",
    re.IGNORECASE,
)
_PASSION = re.compile(
    r"\b(?:passionate|love|excited|dedicated|committed|driven|motivated|inspire)\b", re.IGNORECASE
)


class EssayTooShortError(ValueError):
    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(
            f"Please write at least {MIN_ESSAY_CHARS} characters for a meaningful analysis "
            f"(received {length})."
        )


@dataclass(frozen=True, slots=True)
class FeedbackItem:
    category: str
    title: str
    text: str


@dataclass(frozen=True, slots=True)
class EssayAnalysis:
    score: int
    rating: str
    feedback: tuple[FeedbackItem, ...]
    word_count: int


def _count(pattern: re.Pattern[str], text: str) -> int:
    return len(pattern.findall(text))


def _score_length(text: str) -> tuple[int, FeedbackItem]:
    words = word_count(text)
    if IDEAL_MIN_WORDS <= words <= IDEAL_MAX_WORDS:
        return 15, FeedbackItem(
            POSITIVE,
            "Perfect Length",
            f"Your essay has {words} words - ideal for scholarship applications (250-650 words).",
        )
    if words < IDEAL_MIN_WORDS:
        return 8, FeedbackItem(
            WARNING,
            "Too Short",
            f"Your essay has {words} words. Most scholarships require 250-650 words. "
            "Add more specific examples and details.",
        )
    return 10, FeedbackItem(
        WARNING,
        "Too Long",
        f"Your essay has {words} words. Consider cutting to 250-650 words to stay focused "
        "and respect word limits.",
    )


def _score_personal_voice(text: str) -> tuple[int, FeedbackItem]:
    personal_count = _count(_PERSONAL, text)
    if personal_count >= 5 and _STORY.search(text):
        return 20, FeedbackItem(
            POSITIVE,
            "Personal & Authentic",
            "Great use of personal experiences and stories! This makes your essay engaging and unique.",
        )
    if personal_count >= 3:
        return 12, FeedbackItem(
            WARNING,
            "Add More Personal Stories",
            "Include specific anecdotes from your life to make your essay more memorable and authentic.",
        )
    return 5, FeedbackItem(
        NEGATIVE,
        "Too Generic",
        "Your essay lacks personal examples. Share specific experiences, challenges, "
        "or moments that shaped you.",
    )


def _score_specificity(text: str) -> tuple[int, FeedbackItem]:
    specific_count = _count(_SPECIFIC, text)
    vague_count = _count(_VAGUE, text)
    if specific_count > vague_count and specific_count >= 3:
        return 20, FeedbackItem(
            POSITIVE,
            "Specific & Detailed",
            "Excellent use of specific examples, numbers, and concrete details. "
            "This makes your essay credible.",
        )
    if specific_count >= 2:
        return 12, FeedbackItem(
            WARNING,
            "Add More Specifics",
            'Replace vague words ("good", "nice", "many") with specific details, numbers, and examples.',
        )
    return 5, FeedbackItem(
        NEGATIVE,
        "Too Vague",
        "Your essay uses too many general statements. Add specific names, numbers, "
        "achievements, and details.",
    )


def _score_goals(text: str) -> tuple[int, FeedbackItem]:
    goal_count = _count(_GOALS, text)
    if goal_count >= 4:
        return 20, FeedbackItem(
            POSITIVE,
            "Clear Goals & Impact",
            "You clearly articulate your goals and how you'll make an impact. "
            "Scholarship committees love this!",
        )
    if goal_count >= 2:
        return 12, FeedbackItem(
            WARNING,
            "Strengthen Your Vision",
            "Expand on your future goals and how this scholarship will help you achieve them.",
        )
    return 5, FeedbackItem(
        NEGATIVE,
        "Missing Future Vision",
        "Explain your goals and how you plan to contribute to your field or community after graduation.",
    )


def _score_structure(text: str) -> tuple[int, FeedbackItem]:
    paragraphs = split_paragraphs(text)
    avg_length = average_sentence_length(text)
    readable = not math.isnan(avg_length) and 10 < avg_length < 25
    if 3 <= len(paragraphs) <= 5 and readable:
        return 15, FeedbackItem(
            POSITIVE,
            "Well-Structured",
            f"Great structure with {len(paragraphs)} paragraphs and clear, readable sentences.",
        )
    if len(paragraphs) >= 2:
        return 10, FeedbackItem(
            WARNING,
            "Improve Structure",
            "Aim for 3-5 paragraphs with varied sentence lengths. "
            "Break up long paragraphs for better readability.",
        )
    return 5, FeedbackItem(
        NEGATIVE,
        "Poor Structure",
        "Break your essay into clear paragraphs: Introduction, Body (experiences/goals), and Conclusion.",
    )


def _score_passion(text: str) -> tuple[int, FeedbackItem]:
    if _count(_PASSION, text) >= 2:
        return 10, FeedbackItem(
            POSITIVE,
            "Passionate & Motivated",
            "Your enthusiasm shines through! This energy makes your essay compelling.",
        )
    return 5, FeedbackItem(
        WARNING,
        "Show Your Passion",
        "Let your excitement and dedication come through more clearly. Why does this matter to you?",
    )


_CRITERIA: tuple[Callable[[str], tuple[int, FeedbackItem]], ...] = (
    _score_length,
    _score_personal_voice,
    _score_specificity,
    _score_goals,
    _score_structure,
    _score_passion,
)


def essay_rating(score: int) -> str:
    if score >= 85:
        return "Excellent"
    if score >= 70:
        return "Good"
    if score >= 50:
        return "Needs Work"
    return "Needs Major Revision"


def score_essay(text: str) -> EssayAnalysis:
    trimmed = (text or "").strip()
    if len(trimmed) < MIN_ESSAY_CHARS:
        raise EssayTooShortError(len(trimmed))

    total = 0
    feedback: list[FeedbackItem] = []
    for criterion in _CRITERIA:
        points, item = criterion(trimmed)
        total += points
        feedback.append(item)

    score = round(total / MAX_SCORE * 100)
    return EssayAnalysis(
        score=score,
        rating=essay_rating(score),
        feedback=tuple(feedback),
        word_count=word_count(trimmed),
    )
