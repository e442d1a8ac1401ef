from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from splitshare.config import get_settings
from splitshare.logging import configure_logging, get_logger
from splitshare.schemas import CalculationDocument
from splitshare.services.report import format_summary
from splitshare.services.settlement import compute_summary
from splitshare.services.split import InvalidAmountError

EXIT_OK = 0
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="splitshare", description="Split group expenses and settle debts.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    summary = subparsers.add_parser("summary", help="Print balances and transfers for a calculation file")
    summary.add_argument("path", type=Path, help="JSON file with participants and expenses")
    summary.add_argument("--format", choices=("text", "json"), default="text", dest="output_format")
    summary.set_defaults(func=lambda args: run_summary(args.path, args.output_format))
    return parser


def load_document(path: Path) -> CalculationDocument:
    raw = json.loads(path.read_text(encoding="utf-8"))
    return CalculationDocument.model_validate(raw)


def run_summary(path: Path, output_format: str) -> int:
    log = get_logger(__name__)
    settings = get_settings()

    try:
        document = load_document(path)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Cannot read {path}: {exc}", file=sys.stderr)
        return EXIT_INVALID
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON in {path}: {exc}", file=sys.stderr)
        return EXIT_INVALID
    except ValidationError as exc:
        print(f"Invalid calculation document {path}:\n{exc}", file=sys.stderr)
        return EXIT_INVALID

    participants, expenses = document.to_models()
    try:
        summary = compute_summary(participants, expenses)
    except InvalidAmountError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_INVALID

    log.info(
        "summary.computed",
        path=str(path),
        participants=len(participants),
        expenses=len(expenses),
        transfers=len(summary.transfers),
    )

    if output_format == "json":
        print(json.dumps(summary.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(format_summary(summary, settings.currency_symbol, document.group_name))
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
