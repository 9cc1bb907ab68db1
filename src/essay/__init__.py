"""Essay heuristics: counts, tone and rubric quality score."""

from src.essay.quality import EssayAnalysis, EssayTooShortError, FeedbackItem, essay_rating, score_essay
from src.essay.text_stats import char_count, word_count
from src.essay.tone import ToneResult, classify_tone

__all__ = [
    "EssayAnalysis",
    "EssayTooShortError",
    "FeedbackItem",
    "ToneResult",
    "char_count",
    "classify_tone",
    "essay_rating",
    "score_essay",
    "word_count",
]
