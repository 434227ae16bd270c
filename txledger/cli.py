"""Command-line entry point: txledger FILE"""

from __future__ import annotations
import argparse
import sys
from typing import List, Optional

from .processor import LedgerProcessor
from .report import write_report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="txledger",
        description="Replay a CSV transaction stream and print the final client accounts.",
    )
    parser.add_argument("file", help="CSV file with type,client,tx,amount rows")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    processor = LedgerProcessor()
    try:
        with open(args.file, newline="") as stream:
            processor.read(stream)
    except (OSError, UnicodeDecodeError) as e:
        reason = getattr(e, "strerror", None) or e
        print(f"Failed to open file {args.file}: {reason}", file=sys.stderr)
        return 1

    write_report(processor, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
