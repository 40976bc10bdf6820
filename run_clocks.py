#!/usr/bin/env python3
# run_clocks.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Command-line interface for trace replay and causal queries

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from parser import parse_queries
from parser.exceptions import ParseError
from replay import TraceReplayer, ReplayResult, QueryError, QueryOutcome, evaluate_queries
from utils.clock_codec import format_clock
from utils.logger import configure_logging, get_logger
from utils.trace_reader import TraceFormatError, validate_trace_file

EXIT_OK = 0
EXIT_TRACE_ERROR = 1
EXIT_PARSE_ERROR = 2
EXIT_QUERY_ERROR = 3
EXIT_INTERRUPTED = 4
EXIT_UNEXPECTED = 5
EXIT_QUERY_FAILED = 6


def read_query_file(filepath: Path) -> str:
    """Read causal queries from file.

    Raises:
        FileNotFoundError: If query file doesn't exist
        QueryError: If query file is empty or unreadable
    """
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Query file not found: {filepath}")
    except OSError as e:
        raise QueryError(f"Error reading query file: {e}") from e

    if not content.strip():
        raise QueryError("Query file is empty")

    return content


def print_report(result: ReplayResult, print_clocks: bool) -> None:
    """Print conflicts and, optionally, every node's final clock."""
    print(f"Events processed: {result.events_processed}")
    print(f"Conflicts detected: {len(result.conflicts)}")
    for conflict in result.conflicts:
        print(f"  ⚡ {conflict}")
    if result.halted:
        print("Replay halted on first conflict")

    if print_clocks:
        print("Final clocks:")
        for node in result.nodes:
            print(f"  {node}: [{format_clock(result.clocks[node])}]")


def print_query_outcomes(outcomes: List[QueryOutcome]) -> None:
    held = sum(1 for outcome in outcomes if outcome.holds)
    for outcome in outcomes:
        mark = "TRUE " if outcome.holds else "FALSE"
        print(f"  {mark} line {outcome.query.line}: {outcome.query.text}")
    print(f"Queries holding: {held}/{len(outcomes)}")


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser for command line interface."""
    parser = argparse.ArgumentParser(
        description="Chronicle vector clock trace replay",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_clocks.py -t trace.csv
  python run_clocks.py -t trace.csv -q checks.q -v
  python run_clocks.py -t trace.csv --print-clocks --stop-on-conflict
  python run_clocks.py -t trace.csv --validate-only

Trace file format:
  # nodes: a|b|c
  eid,node,type,source
  e1,a,local,
  e2,c,send,
  e3,b,receive,e2

Query file format (one per line):
  e1 < e3
  e2 ~ e1 | @b == [a:0;b:1;c:1]
        """,
    )

    parser.add_argument(
        "-t", "--trace", required=True, type=Path, help="Path to CSV trace file"
    )

    parser.add_argument(
        "-q", "--queries", type=Path, help="Path to causal query file"
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every transition"
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output (overrides --verbose)"
    )

    parser.add_argument(
        "--validate-only", action="store_true", help="Only validate trace file format"
    )

    parser.add_argument(
        "--stop-on-conflict",
        action="store_true",
        help="Stop replaying at the first rejected receive",
    )

    parser.add_argument(
        "--reject-not-comparable",
        action="store_true",
        help="Reject receives whose sender tracks a different node set",
    )

    parser.add_argument(
        "--print-clocks", action="store_true", help="Print every node's final clock"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for trace replay.

    Returns:
        Exit code (0 for success, non-zero for errors or failed queries)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, debug=args.debug)
    logger = get_logger()

    try:
        queries = []
        if args.queries is not None:
            queries = parse_queries(read_query_file(args.queries))
            logger.info(f"📋 Queries loaded: {len(queries)}")

        logger.info(f"🔍 Validating trace file: {args.trace}")
        record_count = validate_trace_file(str(args.trace))

        if args.validate_only:
            print(f"Trace is valid: {record_count} events")
            return EXIT_OK

        replayer = TraceReplayer.from_file(
            args.trace, reject_not_comparable=args.reject_not_comparable
        )
        logger.info(f"Nodes: {', '.join(replayer.nodes)}")

        result = replayer.run(stop_on_conflict=args.stop_on_conflict)
        print_report(result, args.print_clocks)

        if queries:
            outcomes = evaluate_queries(queries, result)
            print_query_outcomes(outcomes)
            if not all(outcome.holds for outcome in outcomes):
                return EXIT_QUERY_FAILED

        return EXIT_OK

    except TraceFormatError as e:
        logger.error(f"Trace file error: {e}")
        return EXIT_TRACE_ERROR

    except ParseError as e:
        logger.error(f"Query parsing error: {e}")
        return EXIT_PARSE_ERROR

    except (QueryError, FileNotFoundError) as e:
        logger.error(f"Query error: {e}")
        return EXIT_QUERY_ERROR

    except KeyboardInterrupt:
        logger.error("Replay interrupted by user")
        return EXIT_INTERRUPTED

    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        import traceback

        traceback.print_exc()
        return EXIT_UNEXPECTED


if __name__ == "__main__":
    sys.exit(main())
