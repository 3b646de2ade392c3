"""
CLI tool to classify a line of call-pad shorthand.

Usage:
    python scripts/parse_text.py "<text>" [--ai] [--today YYYY-MM-DD] [--apply]

Examples:
    # Deterministic rules only
    python scripts/parse_text.py "mesa az, wedding, pu at 9pm, 30 people"

    # Escalate unresolved fragments to the fallback model
    python scripts/parse_text.py "walmart on frye and gilbert" --ai

    # Run the chips through the auto-populate gate and print the record
    python scripts/parse_text.py "john smith, 602-555-1234, next friday" --apply
"""

import argparse
import asyncio
import json
import os
import sys
from datetime import date

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from dotenv import load_dotenv
load_dotenv(".env.local")

from callpad.logging_config import setup_logging, get_logger
from callpad.schemas.detection import ParseRequest
from callpad.services.chip_workflow import ChipSession
from callpad.services.input_parser import InputParser

setup_logging()
logger = get_logger(__name__)


async def parse_text(
    text: str,
    use_ai: bool = False,
    today: date | None = None,
    apply: bool = False,
) -> None:
    """Parse one line and print the items (and optionally the call record)."""
    parser = InputParser()
    response = await parser.parse(ParseRequest(text=text, use_ai=use_ai), today)

    for item in response.items:
        metro = f"  → {item.normalized_city}" if item.normalized_city else ""
        print(f"{item.kind.value:<16} {item.confidence:.2f}  {item.value!r}{metro}")

    if apply:
        session = ChipSession(today=today)
        session.add_items(response.items)
        pending = session.pending()
        if pending:
            print(f"\n{len(pending)} chip(s) awaiting review:")
            for chip in pending:
                print(f"  {chip.kind.value:<16} {chip.item.value!r}")
        print("\nCall record:")
        print(json.dumps(session.record.to_public(), indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description="Classify call-pad shorthand")
    parser.add_argument("text", help="Comma-delimited shorthand, quoted")
    parser.add_argument("--ai", action="store_true", help="Send unresolved fragments to the fallback model")
    parser.add_argument("--today", type=date.fromisoformat, help="Reference date for relative dates")
    parser.add_argument("--apply", action="store_true", help="Apply auto-populated chips and print the record")

    args = parser.parse_args()

    if not args.text.strip():
        parser.error("text must not be empty")

    asyncio.run(parse_text(
        text=args.text,
        use_ai=args.ai,
        today=args.today,
        apply=args.apply,
    ))


if __name__ == "__main__":
    main()
