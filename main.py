"""
Keyguard Command Line

Evaluates one keystroke log and prints the verdict as JSON.

    python main.py --username alice --log keystrokes.json
    cat keystrokes.json | python main.py --username alice --log -

Exit status: 0 when the attempt may proceed, 2 when a challenge is required.
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from keyguard.config import get_settings
from keyguard.evaluator import AutomationEvaluator
from keyguard.schemas.inputs import ClassifierPolicy, EvaluationRequest
from keyguard.schemas.outputs import AttemptDecision


logger = logging.getLogger(__name__)


EXIT_PROCEED = 0
EXIT_CHALLENGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Detect automated password entry from a keystroke log"
    )
    parser.add_argument("--username", required=True, help="Username of the attempt")
    parser.add_argument(
        "--log",
        default="-",
        help="Keystroke log file, or - for stdin (default: -)"
    )
    parser.add_argument(
        "--min-length",
        type=int,
        default=None,
        help="Minimum password length of the realm (default: from settings)"
    )
    parser.add_argument(
        "--policy",
        choices=[p.value for p in ClassifierPolicy],
        default=None,
        help="Classifier policy (default: from settings)"
    )
    parser.add_argument("--wordlist", default=None, help="Challenge word list path")
    parser.add_argument(
        "--production",
        action="store_true",
        help="Suppress diagnostic log lines"
    )
    return parser


def read_log(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.min_length is not None and args.min_length < 0:
        parser.error("--min-length must be non-negative")

    settings = get_settings()
    if args.production:
        settings = replace(settings, production=True)
    if args.wordlist:
        settings = replace(settings, wordlist_path=args.wordlist)

    logging.basicConfig(
        level=logging.INFO if settings.production else logging.DEBUG,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        keystrokes = read_log(args.log)
    except OSError as e:
        logger.error(f"Could not read keystroke log: {e}")
        return 1

    min_length = args.min_length if args.min_length is not None else settings.password_min_length

    evaluator = AutomationEvaluator(settings=settings)
    verdict = evaluator.evaluate(
        EvaluationRequest(
            username=args.username,
            keystroke_data=keystrokes,
            password_min_length=min_length,
        ),
        policy=ClassifierPolicy(args.policy) if args.policy else None,
    )

    print(verdict.model_dump_json())

    if verdict.decision == AttemptDecision.CHALLENGE:
        return EXIT_CHALLENGE
    return EXIT_PROCEED


if __name__ == "__main__":
    sys.exit(main())
