from __future__ import annotations

from src.essay.tone import BALANCED, CASUAL, FORMAL, NEUTRAL, classify_tone


def test_short_text_is_neutral_without_feedback() -> None:
    result = classify_tone("Furthermore, moreover, therefore, thus.")

    assert result.label == NEUTRAL
    assert result.feedback == ""


def test_formal_connectors_outweigh_short_sentence_bonus() -> None:
    text = (
        "Furthermore, the committee reviewed the proposal. Moreover, the results were consistent. "
        "Consequently, the board approved it. Therefore, funding was granted."
    )

    result = classify_tone(text)

    assert result.formal_score == 8
    assert result.casual_score == 3
    assert result.label == FORMAL
    assert "formal academic tone" in result.feedback


def test_slang_and_contractions_read_as_casual() -> None:
    result = classify_tone("Yeah this is super cool and awesome, I'm gonna love it. Wow!")

    assert result.casual_score == 16
    assert result.label == CASUAL


def test_close_scores_resolve_to_balanced() -> None:
    plain = "The student organized a weekly study group for classmates preparing for the final chemistry examination this spring."
    result = classify_tone(plain)

    assert (result.formal_score, result.casual_score) == (0, 0)
    assert result.label == BALANCED

    margin = classify_tone("Therefore " + plain)
    assert margin.formal_score == 2
    assert margin.label == BALANCED


def test_matching_uses_whole_words_only() -> None:
    result = classify_tone(
        "The supervisor discussed the coolant system with the thusly named engineering team in detail today."
    )

    assert (result.formal_score, result.casual_score) == (0, 0)
