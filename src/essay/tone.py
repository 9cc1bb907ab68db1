from __future__ import annotations

import math
import re
from dataclasses import dataclass

from src.essay.text_stats import average_sentence_length

MIN_TONE_CHARS = 50
TONE_MARGIN = 3
SENTENCE_LENGTH_BONUS = 3
LONG_SENTENCE_WORDS = 20
SHORT_SENTENCE_WORDS = 12

FORMAL_WORDS = (
    "furthermore",
    "moreover",
    "consequently",
    "nevertheless",
    "therefore",
    "thus",
    "henceforth",
    "wherein",
    "thereby",
)
CASUAL_WORDS = ("yeah", "cool", "awesome", "gonna", "wanna", "kinda", "sorta", "hey", "wow", "super")
CONTRACTIONS = ("don't", "can't", "won't", "i'm", "you're", "it's", "we're", "they're")

NEUTRAL = "Neutral"
FORMAL = "Formal"
CASUAL = "Casual"
BALANCED = "Balanced"

TONE_FEEDBACK = {
    FORMAL: (
        "Your essay has a formal academic tone. This is good for scholarship applications! "
        "Consider adding personal anecdotes to make it more engaging."
    ),
    CASUAL: (
        "Your essay sounds conversational. Try using more formal language and avoiding "
        "contractions for scholarship applications."
    ),
    BALANCED: "Perfect balance! Your tone is professional yet personal - ideal for scholarship essays.",
}


@dataclass(frozen=True, slots=True)
class ToneResult:
    label: str
    feedback: str
    formal_score: int = 0
    casual_score: int = 0


def _occurrences(words: tuple[str, ...], text: str) -> int:
    return sum(len(re.findall(rf"\b{re.escape(word)}\b", text)) for word in words)


def classify_tone(text: str) -> ToneResult:
    lowered = (text or "").lower()
    if len(lowered.strip()) < MIN_TONE_CHARS:
        return ToneResult(label=NEUTRAL, feedback="")

    formal_score = 2 * _occurrences(FORMAL_WORDS, lowered)
    casual_score = 2 * _occurrences(CASUAL_WORDS, lowered) + _occurrences(CONTRACTIONS, lowered)

    avg_length = average_sentence_length(lowered)
    if not math.isnan(avg_length):
        if avg_length > LONG_SENTENCE_WORDS:
            formal_score += SENTENCE_LENGTH_BONUS
        if avg_length < SHORT_SENTENCE_WORDS:
            casual_score += SENTENCE_LENGTH_BONUS

    if formal_score > casual_score + TONE_MARGIN:
        label = FORMAL
    elif casual_score > formal_score + TONE_MARGIN:
        label = CASUAL
    else:
        label = BALANCED

    return ToneResult(
        label=label,
        feedback=TONE_FEEDBACK[label],
        formal_score=formal_score,
        casual_score=casual_score,
    )
