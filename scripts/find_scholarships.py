from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app.helpers import (
    NOT_ELIGIBLE_HEADING,
    ResultCard,
    build_remote_cards,
    build_result_cards,
    eligible_heading,
    split_cards,
)
from src.catalog.scholarships import get_catalog, load_catalog
from src.config import AppSettings
from src.io.profile_store import ProfileStore
from src.normalize.schema import INCOME_BRACKETS, StudentProfile
from src.normalize.validation import ProfileValidationError, require_valid_profile
from src.recommend.service import SOURCE_REMOTE, RecommendationOutcome, build_recommender, recommend

logger = logging.getLogger("find_scholarships")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check scholarship eligibility for a student profile.")
    parser.add_argument("--gpa", type=str, default=None, help="GPA between 0.0 and 4.0.")
    parser.add_argument("--income", choices=INCOME_BRACKETS, default=None)
    parser.add_argument("--course", type=str, default=None, help="Field of study.")
    parser.add_argument("--activities", type=str, default="")
    parser.add_argument(
        "--remote",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Ask the AI recommendation endpoint first (defaults to settings).",
    )
    parser.add_argument("--api-url", type=str, default=None)
    parser.add_argument("--timeout-seconds", type=float, default=None)
    parser.add_argument("--profile-path", type=Path, default=None)
    parser.add_argument("--catalog", type=Path, default=None, help="Optional JSON catalog override.")
    parser.add_argument("--save-profile", action="store_true", help="Persist the profile after validation.")
    parser.add_argument(
        "--use-saved-profile",
        action="store_true",
        help="Fill missing flags from the last saved profile.",
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON.")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def _resolve_settings(args: argparse.Namespace) -> AppSettings:
    return AppSettings.from_env().with_overrides(
        api_url=args.api_url,
        remote_enabled=args.remote,
        request_timeout_seconds=args.timeout_seconds,
        profile_path=args.profile_path,
    )


def _profile_from_args(args: argparse.Namespace, saved: StudentProfile | None) -> StudentProfile:
    fallback = saved.to_dict() if saved is not None else {}
    return require_valid_profile(
        gpa=args.gpa if args.gpa is not None else fallback.get("gpa"),
        income=args.income or fallback.get("income"),
        course=args.course if args.course is not None else fallback.get("course"),
        activities=args.activities or fallback.get("activities", ""),
    )


def _card_payload(card: ResultCard) -> dict[str, Any]:
    return {
        "name": card.name,
        "is_eligible": card.is_eligible,
        "match_score": card.match_score,
        "match_label": card.match_label,
        "reasons": list(card.reasons),
        "amount": card.amount,
        "deadline": card.deadline,
    }


def _outcome_cards(outcome: RecommendationOutcome, profile: StudentProfile) -> list[ResultCard]:
    if outcome.source == SOURCE_REMOTE:
        return build_remote_cards(outcome.remote_results)
    return build_result_cards(outcome.local_results, profile)


def _print_cards(cards: list[ResultCard]) -> None:
    eligible, not_eligible = split_cards(cards)
    if eligible:
        print(eligible_heading(len(eligible)))
        for card in eligible:
            _print_card(card)
    if not_eligible:
        print(NOT_ELIGIBLE_HEADING)
        for card in not_eligible:
            _print_card(card)


def _print_card(card: ResultCard) -> None:
    header = f"  {card.name} [{card.eligibility_label}]"
    if card.badge_text:
        header = f"{header} {card.badge_text}"
    print(header)
    for reason in card.reasons:
        print(f"    - {reason}")
    print(f"    Amount: {card.amount} | Deadline: {card.deadline}")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = _resolve_settings(args)
    store = ProfileStore(path=Path(settings.profile_path))
    saved = store.load() if args.use_saved_profile else None

    try:
        profile = _profile_from_args(args, saved)
    except ProfileValidationError as exc:
        for field_name, message in exc.errors.items():
            print(f"{field_name}: {message}", file=sys.stderr)
        return 1

    if args.save_profile:
        store.save(profile)
        logger.info("Saved profile to %s", settings.profile_path)

    catalog = load_catalog(args.catalog) if args.catalog is not None else get_catalog()
    recommender = build_recommender(settings)
    try:
        outcome = recommend(profile, recommender=recommender, catalog=catalog)
    finally:
        if recommender is not None:
            recommender.http_client.close()

    if outcome.notice:
        logger.warning(outcome.notice)

    cards = _outcome_cards(outcome, profile)
    if args.json:
        payload = {
            "source": outcome.source,
            "notice": outcome.notice,
            "results": [_card_payload(card) for card in cards],
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        _print_cards(cards)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
