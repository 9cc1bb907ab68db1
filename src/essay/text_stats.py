from __future__ import annotations

import math
import re

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")


def word_count(text: str) -> int:
    return len(text.strip().split())


def char_count(text: str) -> int:
    return len(text.strip())


def split_sentences(text: str) -> list[str]:
    return [fragment for fragment in _SENTENCE_SPLIT.split(text) if fragment.strip()]


def split_paragraphs(text: str) -> list[str]:
    return [paragraph for paragraph in _PARAGRAPH_SPLIT.split(text) if paragraph.strip()]


def average_sentence_length(text: str) -> float:
    """Mean words per sentence; NaN when the text has no sentences."""
    sentences = split_sentences(text)
    if not sentences:
        return math.nan
    return sum(len(sentence.split()) for sentence in sentences) / len(sentences)
