from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from src.essay.quality import EssayTooShortError, score_essay
from src.essay.text_stats import char_count, word_count
from src.essay.tone import classify_tone

logger = logging.getLogger("check_essay")

EXIT_TOO_SHORT = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Score a scholarship essay with the rubric heuristics.")
    parser.add_argument("path", type=str, help="Essay text file, or '-' to read stdin.")
    parser.add_argument("--json", action="store_true", help="Print the analysis as JSON.")
    return parser.parse_args(argv)


def _read_text(path_text: str) -> str:
    if path_text == "-":
        return sys.stdin.read()
    path = Path(path_text)
    if not path.exists():
        raise FileNotFoundError(f"Essay file not found: {path}")
    return path.read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    text = _read_text(args.path)
    tone = classify_tone(text)

    try:
        analysis = score_essay(text)
    except EssayTooShortError as exc:
        logger.error("%s", exc)
        return EXIT_TOO_SHORT

    if args.json:
        payload = {
            "words": word_count(text),
            "characters": char_count(text),
            "tone": tone.label,
            "score": analysis.score,
            "rating": analysis.rating,
            "feedback": [
                {"category": item.category, "title": item.title, "text": item.text}
                for item in analysis.feedback
            ],
        }
        print(json.dumps(payload, indent=2))
        return 0

    print(f"Words: {word_count(text)} | Characters: {char_count(text)} | Tone: {tone.label}")
    if tone.feedback:
        print(tone.feedback)
    print(f"Score: {analysis.score}% ({analysis.rating})")
    for item in analysis.feedback:
        print(f"  [{item.category}] {item.title}: {item.text}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
