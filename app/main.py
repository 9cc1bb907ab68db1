from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import streamlit as st

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app.helpers import (
    NOT_ELIGIBLE_HEADING,
    ResultCard,
    build_remote_cards,
    build_result_cards,
    eligible_heading,
    essay_score_text,
    results_summary,
    split_cards,
)
from src.config import AppSettings
from src.essay.quality import EssayTooShortError, score_essay
from src.essay.text_stats import char_count, word_count
from src.essay.tone import classify_tone
from src.io.profile_store import ProfileStore
from src.normalize.schema import INCOME_BRACKETS
from src.normalize.validation import validate_profile_form
from src.rank.eligibility import results_to_frame
from src.recommend.service import SOURCE_REMOTE, build_recommender, recommend

logger = logging.getLogger("scholarship_finder.app")

_INCOME_LABELS = {
    "low": "Low (under $30,000)",
    "medium": "Medium ($30,000 - $75,000)",
    "high": "High (over $75,000)",
}
_FEEDBACK_ICONS = {"positive": "✅", "warning": "💡", "negative": "❌"}


@st.cache_resource(show_spinner=False)
def _settings() -> AppSettings:
    return AppSettings.from_env()


def _store() -> ProfileStore:
    return ProfileStore(path=Path(_settings().profile_path))


def _ensure_session_state() -> None:
    if "form_prefilled" not in st.session_state:
        saved = _store().load()
        st.session_state.profile_gpa = f"{saved.gpa:g}" if saved else ""
        st.session_state.profile_income = saved.income if saved else None
        st.session_state.profile_course = saved.course if saved else ""
        st.session_state.profile_activities = saved.activities if saved else ""
        st.session_state.form_prefilled = True
        if saved is not None:
            st.toast("We loaded your previous information")
    st.session_state.setdefault("form_errors", {})
    st.session_state.setdefault("outcome", None)
    st.session_state.setdefault("submitted_profile", None)
    st.session_state.setdefault("essay_analysis", None)
    st.session_state.setdefault("essay_error", None)


def _field_error(name: str) -> None:
    message = st.session_state.form_errors.get(name)
    if message:
        st.error(message)


def _submit_profile() -> None:
    validation = validate_profile_form(
        gpa=st.session_state.profile_gpa,
        income=st.session_state.profile_income,
        course=st.session_state.profile_course,
        activities=st.session_state.profile_activities,
    )
    st.session_state.form_errors = validation.errors
    if validation.profile is None:
        st.session_state.outcome = None
        return

    _store().save(validation.profile)
    logger.info("Profile submitted (income=%s)", validation.profile.income)
    with st.spinner("Finding scholarships..."):
        outcome = recommend(validation.profile, recommender=build_recommender(_settings()))
    st.session_state.submitted_profile = validation.profile
    st.session_state.outcome = outcome


def _render_card(card: ResultCard) -> None:
    with st.container(border=True):
        title = f"**{card.name}**"
        if card.badge_text:
            title = f"{title}  ·  {card.badge_text}"
        st.markdown(title)
        st.caption(card.eligibility_label)
        st.write(card.description)
        st.markdown("**Requirements (in simple English):**")
        for reason in card.reasons:
            st.markdown(f"- {reason}")
        st.markdown(f"**Amount:** {card.amount} | **Deadline:** {card.deadline}")


def _render_outcome() -> None:
    outcome = st.session_state.outcome
    profile = st.session_state.submitted_profile
    if outcome is None or profile is None:
        return

    if outcome.notice:
        st.warning(outcome.notice)
    else:
        st.success(f"Found {outcome.eligible_count} scholarships you qualify for!")

    if outcome.source == SOURCE_REMOTE:
        cards = build_remote_cards(outcome.remote_results)
    else:
        cards = build_result_cards(outcome.local_results, profile)
    eligible, not_eligible = split_cards(cards)

    st.caption(results_summary(len(eligible), len(not_eligible)))
    if eligible:
        st.subheader(eligible_heading(len(eligible)))
        for card in eligible:
            _render_card(card)
    if not_eligible:
        st.subheader(NOT_ELIGIBLE_HEADING)
        for card in not_eligible:
            _render_card(card)

    if outcome.local_results:
        with st.expander("Table view"):
            st.dataframe(results_to_frame(outcome.local_results, profile), use_container_width=True)


def _check_essay() -> None:
    try:
        st.session_state.essay_analysis = score_essay(st.session_state.get("essay_text") or "")
        st.session_state.essay_error = None
    except EssayTooShortError:
        st.session_state.essay_analysis = None
        st.session_state.essay_error = "Please write at least 100 characters for a meaningful analysis."


def _render_essay_section() -> None:
    st.header("Essay Library")
    st.text_area("Paste your scholarship essay", key="essay_text", height=280)
    text: str = st.session_state.get("essay_text") or ""

    words_col, chars_col, tone_col = st.columns(3)
    words_col.metric("Words", word_count(text))
    chars_col.metric("Characters", char_count(text))
    tone = classify_tone(text)
    tone_col.metric("Tone", tone.label)
    if tone.feedback:
        st.info(tone.feedback)

    st.button("Check Essay Quality", on_click=_check_essay, type="primary")
    if st.session_state.essay_error:
        st.error(st.session_state.essay_error)

    analysis = st.session_state.essay_analysis
    if analysis is not None:
        st.subheader(essay_score_text(analysis))
        for item in analysis.feedback:
            icon = _FEEDBACK_ICONS.get(item.category, "")
            st.markdown(f"**{icon} {item.title}**")
            st.write(item.text)


def _income_label(value: Any) -> str:
    return _INCOME_LABELS.get(str(value), str(value))


def main() -> None:
    st.set_page_config(page_title="AI Scholarship Finder", layout="wide")
    st.title("AI Scholarship Finder & Eligibility Checker")
    _ensure_session_state()

    st.header("Check Your Eligibility")
    if st.session_state.form_errors:
        st.error("Please fix the errors in the form")
    with st.form("eligibility-form"):
        st.text_input("GPA (0.0 - 4.0)", key="profile_gpa")
        _field_error("gpa")
        st.selectbox(
            "Household income",
            options=INCOME_BRACKETS,
            format_func=_income_label,
            placeholder="Select income range",
            key="profile_income",
        )
        _field_error("income")
        st.text_input("Field of study", key="profile_course")
        _field_error("course")
        st.text_area("Activities (optional)", key="profile_activities", height=90)
        submitted = st.form_submit_button("Find Scholarships", type="primary")

    if submitted:
        _submit_profile()
        st.rerun()

    _render_outcome()
    st.divider()
    _render_essay_section()


if __name__ == "__main__":
    main()
