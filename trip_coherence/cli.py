"""trip-coherence CLI: check or repair a trip JSON file."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from trip_coherence.config.settings import resolve_settings
from trip_coherence.domain.enums import Severity
from trip_coherence.domain.exceptions import DomainError
from trip_coherence.domain.models import load_trip
from trip_coherence.infrastructure.logging import get_logger
from trip_coherence.services.coherence_service import validate, validate_and_fix
from trip_coherence.validators import run_all_validators

EXIT_OK = 0
EXIT_RESIDUAL = 1
EXIT_BAD_INPUT = 2


def _load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _write_json(payload: Any, output: str) -> None:
    text = json.dumps(payload, ensure_ascii=False, indent=2)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
    else:
        print(text)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="trip-coherence", description="Validate and repair multi-day itineraries")
    parser.add_argument("--env-file", default="", help="Load settings from this .env file")
    parser.add_argument("--max-rounds", type=int, default=None, help="Override COHERENCE_MAX_REPAIR_ROUNDS")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Report coherence findings as JSON")
    check.add_argument("trip", help="Path to a trip JSON file")
    check.add_argument("-o", "--output", default="")

    fix = sub.add_parser("fix", help="Write the sorted and repaired trip as JSON")
    fix.add_argument("trip", help="Path to a trip JSON file")
    fix.add_argument("-o", "--output", default="")
    return parser


def _run(args: argparse.Namespace) -> int:
    settings = resolve_settings(max_repair_rounds=args.max_rounds)
    trip = load_trip(_load_json(Path(args.trip)))

    if args.command == "check":
        result = validate(trip, settings=settings)
        _write_json(result.model_dump(mode="json", exclude={"repaired"}), args.output)
        return EXIT_RESIDUAL if result.errors else EXIT_OK

    fixed = validate_and_fix(trip, settings=settings)
    _write_json(fixed.model_dump(mode="json"), args.output)
    residual = [row for row in run_all_validators(fixed) if row.severity == Severity.CRITICAL]
    return EXIT_RESIDUAL if residual else EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.env_file:
        load_dotenv(args.env_file, override=False)
    else:
        load_dotenv()
    try:
        return _run(args)
    except (DomainError, OSError, json.JSONDecodeError) as exc:
        get_logger().error("cli", str(exc), command=args.command, error_type=type(exc).__name__)
        print(f"trip-coherence: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT


if __name__ == "__main__":
    raise SystemExit(main())
