"""
Structure a saved handwriting recognition response and print the result.

Usage:
    python -m Transcript.run_transcript path/to/result.json
    python -m Transcript.run_transcript path/to/result.json --outline
    python -m Transcript.run_transcript path/to/result.json --json
"""

import argparse
import logging
import sys
from typing import List, Optional

from Transcript import config
from Transcript.commands import command_scope
from Transcript.exporter import render_hierarchy_tree, to_outline
from Transcript.pipeline import process_file
from Transcript.utils import (
    TranscriptFileError,
    TranscriptInputError,
    TranscriptSecurityError,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Rebuild lines, outline and commands from a recognition result."
    )
    parser.add_argument("path", help="JSON file holding the recognizer response")
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--outline", action="store_true", help="Print nested bullets only")
    output.add_argument("--tree", action="store_true", help="Print the hierarchy tree only")
    output.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format=config.LOG_FORMAT,
    )

    try:
        result = process_file(args.path)
    except (TranscriptFileError, TranscriptSecurityError, TranscriptInputError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(result.model_dump_json(indent=2))
        return 0
    if args.outline:
        print(to_outline(result.lines))
        return 0
    if args.tree:
        print(render_hierarchy_tree(result.lines))
        return 0

    metrics = result.line_metrics
    print(f"Lines: {result.summary.total_lines}")
    print(f"Words: {result.summary.total_words} ({len(result.unmatched_words)} unmatched)")
    print(
        f"Median height: {metrics.median_height:.2f}px, "
        f"indent unit: {metrics.indent_unit:.2f}px"
    )

    if result.warnings:
        print(f"Warnings: {len(result.warnings)}")
        for w in result.warnings[:5]:
            print(f"  - {w}")
        if len(result.warnings) > 5:
            print(f"  ... and {len(result.warnings) - 5} more")

    for cmd in result.commands:
        scope = command_scope(cmd, result.lines)
        where = "document" if cmd.line_index is None else f"lines {scope}"
        print(f"Command {cmd.command}: {cmd.value} ({where})")

    print("=" * 50)
    print(to_outline(result.lines))
    print("=" * 50)
    return 0


if __name__ == "__main__":
    sys.exit(main())
