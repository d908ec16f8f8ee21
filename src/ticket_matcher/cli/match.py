"""
Command-line interface for similar-conversation matching.

Ranks a file of historical conversations against a current conversation.

Usage:
    # Tags and text inline
    ticket-matcher pool.jsonl --tag "CX: Billing: Refund" --text "refund never arrived"

    # Current conversation from a JSON file {"tags": [...], "text": "..."}
    ticket-matcher pool.json --current current.json --output matches.json

    # Tag ranking only, re-sorted by confidence
    ticket-matcher pool.jsonl --tag "CX: Access: Login" --no-tfidf --sort-by-confidence
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ticket_matcher.config import Settings
from ticket_matcher.logging_config import get_logger, setup_logging
from ticket_matcher.matching.engine import MatchingEngine
from ticket_matcher.models.conversation import MatchRequest
from ticket_matcher.models.matching import MatchResult
from ticket_matcher.version import get_current_engine_version


logger = get_logger(__name__)


# ============================================================================
# CLI FUNCTIONS
# ============================================================================

def load_pool(pool_path: Path) -> List[Dict[str, Any]]:
    """
    Read candidate records from a .json array or a .jsonl file.

    Args:
        pool_path: Path to the pool file

    Returns:
        List of raw record dicts

    Raises:
        ValueError: If a .json file does not hold an array
    """
    with open(pool_path, "r", encoding="utf-8") as f:
        if pool_path.suffix == ".jsonl":
            return [json.loads(line) for line in f if line.strip()]

        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"Pool file must contain a JSON array: {pool_path}")
    return data


def build_request(
    current_path: Optional[Path],
    tags: Optional[List[str]],
    text: Optional[str],
    text_file: Optional[Path],
) -> MatchRequest:
    """
    Assemble the current conversation from a JSON file and/or CLI flags.

    Flags override values from the file.
    """
    payload: Dict[str, Any] = {}
    if current_path:
        with open(current_path, "r", encoding="utf-8") as f:
            payload = json.load(f)

    request = MatchRequest.model_validate(payload)

    updates: Dict[str, Any] = {}
    if tags:
        updates["tags"] = tags
    if text_file:
        updates["text"] = text_file.read_text(encoding="utf-8")
    elif text is not None:
        updates["text"] = text

    return request.model_copy(update=updates)


def write_output(matches: List[MatchResult], output_path: Optional[Path], format: str = "json"):
    """
    Write matches to a file or stdout.

    Args:
        matches: Ranked matches
        output_path: Output file path (None = stdout)
        format: "json" (envelope with engine version) or "jsonl" (one match per line)
    """
    records = [match.model_dump(by_alias=True) for match in matches]

    if format == "jsonl":
        content = "".join(json.dumps(r, ensure_ascii=False) + "\n" for r in records)
    else:
        envelope = {
            "engine_version": get_current_engine_version().model_dump(),
            "matches": records,
        }
        content = json.dumps(envelope, ensure_ascii=False, indent=2) + "\n"

    if not output_path:
        sys.stdout.write(content)
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")

    logger.info("output_written", path=str(output_path), count=len(records))


# ============================================================================
# MAIN CLI
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ticket-matcher",
        description="Rank historical support conversations against the current one",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s pool.jsonl --tag "CX: Billing: Refund" --text "refund never arrived"
  %(prog)s pool.json --current current.json --output matches.json
  %(prog)s pool.jsonl --tag "CX: Access: Login" --no-tfidf --sort-by-confidence
        """,
    )

    parser.add_argument("pool", type=str, help="Candidate pool (.json array or .jsonl)")
    parser.add_argument(
        "--current",
        "-c",
        type=str,
        default=None,
        help='JSON file describing the current conversation: {"tags": [...], "text": "..."}',
    )
    parser.add_argument(
        "--tag",
        "-t",
        action="append",
        dest="tags",
        default=None,
        help="Current conversation tag (repeatable)",
    )
    text_group = parser.add_mutually_exclusive_group()
    text_group.add_argument("--text", type=str, default=None, help="Current conversation text")
    text_group.add_argument(
        "--text-file", type=str, default=None, help="File holding the current conversation text"
    )
    parser.add_argument(
        "--no-tfidf", action="store_true", help="Disable text similarity (tag rank only)"
    )
    parser.add_argument(
        "--sort-by-confidence",
        action="store_true",
        help="Re-sort results by final confidence instead of pool order",
    )
    parser.add_argument(
        "--output", "-o", type=str, default=None, help="Output file path (default: stdout)"
    )
    parser.add_argument(
        "--format",
        "-f",
        type=str,
        choices=["json", "jsonl"],
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    overrides: Dict[str, Any] = {"log_json": False}
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    if args.no_tfidf:
        overrides["enable_tfidf_scoring"] = False
    if args.sort_by_confidence:
        overrides["sort_by_confidence"] = True
    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(settings)

    pool_path = Path(args.pool)
    for path in (pool_path, args.current, args.text_file):
        if path and not Path(path).exists():
            print(f"Error: Path not found: {path}", file=sys.stderr)
            return 1

    try:
        request = build_request(
            current_path=Path(args.current) if args.current else None,
            tags=args.tags,
            text=args.text,
            text_file=Path(args.text_file) if args.text_file else None,
        )

        engine = MatchingEngine(settings=settings)
        matches = engine.match_from_source(
            request.tags, request.text, lambda: load_pool(pool_path)
        )

        output_path = Path(args.output) if args.output else None
        write_output(matches, output_path, args.format)

        if args.verbose:
            print(f"\n✓ {len(matches)} similar conversations found", file=sys.stderr)

    except Exception as e:
        logger.error("cli_failed", error=str(e), exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
