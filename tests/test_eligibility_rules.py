from __future__ import annotations

from src.catalog.scholarships import get_catalog, get_scholarship
from src.normalize.schema import ScholarshipRecord, ScholarshipRequirements, StudentProfile
from src.rank.eligibility import evaluate, find_all, partition_results, results_to_frame


def _cs_student(gpa: float = 3.6) -> StudentProfile:
    return StudentProfile(gpa=gpa, income="medium", course="Computer Science", activities="debate club")


def test_evaluate_stem_grant_passes_every_criterion() -> None:
    result = evaluate(_cs_student(), get_scholarship(3))

    assert result.is_eligible is True
    assert result.reasons == (
        "✓ Your GPA of 3.6 meets the requirement",
        "✓ Income level matches requirements",
        "✓ Your field of study matches requirements",
    )


def test_evaluate_keeps_checking_after_first_failure() -> None:
    profile = StudentProfile(gpa=2.0, income="high", course="Art History", activities="")

    result = evaluate(profile, get_scholarship(2))

    assert result.is_eligible is False
    assert result.reasons == (
        "GPA must be at least 2.5 (you have 2)",
        "Income level does not match requirements",
        "✓ Open to all fields of study",
        "Activities must include: community service, volunteering, volunteer",
    )


def test_evaluate_fails_course_when_no_keyword_matches() -> None:
    profile = StudentProfile(gpa=3.9, income="low", course="Art History")

    result = evaluate(profile, get_scholarship(6))

    assert result.is_eligible is False
    assert result.reasons[2] == (
        "Field of study must be one of: business, commerce, finance, accounting, entrepreneurship, marketing"
    )
    assert len(result.reasons) == 3


def test_evaluate_matches_course_and_activities_case_insensitively() -> None:
    profile = StudentProfile(
        gpa=3.0,
        income="low",
        course="ELECTRICAL ENGINEERING",
        activities="Captain of the Varsity Soccer Team",
    )

    assert evaluate(profile, get_scholarship(3)).is_eligible is True
    athletic = evaluate(profile, get_scholarship(5))
    assert athletic.is_eligible is True
    assert athletic.reasons[-1] == "✓ Your activities match requirements"


def test_evaluate_merit_scholarship_rejects_low_gpa() -> None:
    profile = StudentProfile(gpa=2.0, income="high", course="Art History", activities="")

    result = evaluate(profile, get_scholarship(1))

    assert result.is_eligible is False
    assert result.reasons[0] == "GPA must be at least 3.5 (you have 2)"
    assert result.reasons[1:] == (
        "✓ Income level matches requirements",
        "✓ Open to all fields of study",
    )


def test_gpa_exactly_at_minimum_is_eligible() -> None:
    scholarship = ScholarshipRecord(
        id=99,
        name="Threshold Award",
        description="",
        requirements=ScholarshipRequirements(min_gpa=3.2, income=("low",)),
        amount="$1,000",
        deadline="2026-06-01",
    )
    profile = StudentProfile(gpa=3.2, income="low", course="History")

    assert evaluate(profile, scholarship).is_eligible is True


def test_find_all_preserves_catalog_order() -> None:
    results = find_all(_cs_student())

    assert [result.scholarship.id for result in results] == [1, 2, 3, 4, 5, 6]
    eligible, not_eligible = partition_results(results)
    assert [result.scholarship.id for result in eligible] == [1, 3, 4]
    assert [result.scholarship.id for result in not_eligible] == [2, 5, 6]


def test_find_all_accepts_explicit_catalog() -> None:
    catalog = [get_scholarship(6), get_scholarship(4)]

    results = find_all(_cs_student(), catalog)

    assert [result.scholarship.id for result in results] == [6, 4]


def test_reason_count_depends_only_on_activity_requirement() -> None:
    profile = StudentProfile(gpa=1.0, income="high", course="x", activities="")

    for result in find_all(profile):
        expected = 4 if result.scholarship.requirements.has_activity_requirement else 3
        assert len(result.reasons) == expected


def test_eligibility_is_monotonic_in_gpa() -> None:
    base = {"income": "low", "course": "Business and Finance", "activities": "volunteer, soccer"}
    previously_eligible: set[int] = set()

    for step in range(0, 41):
        profile = StudentProfile(gpa=step / 10, **base)
        eligible_ids = {result.scholarship.id for result in find_all(profile) if result.is_eligible}
        assert previously_eligible <= eligible_ids
        previously_eligible = eligible_ids

    assert previously_eligible == {scholarship.id for scholarship in get_catalog() if scholarship.id != 3}


def test_results_to_frame_keeps_eligibility_and_score_separate() -> None:
    profile = StudentProfile(gpa=2.0, income="high", course="Art History", activities="")

    frame = results_to_frame(find_all(profile), profile).set_index("id")

    assert len(frame) == 6
    assert bool(frame.loc[1, "is_eligible"]) is False
    assert frame.loc[1, "match_score"] == 68
    assert frame.loc[1, "match_label"] == "Good Match"
    assert frame.loc[1, "reasons"][0] == "GPA must be at least 3.5 (you have 2)"
