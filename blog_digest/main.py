"""Command-line entrypoint for blog-digest.

High-level flow:
1) load configuration
2) fetch, extract, summarize and translate each URL
3) print the records (or errors) to stdout
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .orchestrator import Orchestrator
from .output.formatter import format_json, format_markdown
from .output.sinks import JsonlSummarySink, RecordSink, TextArchiveSink
from .utils.config_loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from .utils.logging import configure_logging, get_logger


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract, summarize and translate the main text of blog posts"
    )
    parser.add_argument("urls", nargs="+", metavar="URL", help="Page URL(s) to process")
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to configuration file (YAML); defaults to {DEFAULT_CONFIG_PATH} if present",
    )
    parser.add_argument(
        "--format",
        default="json",
        choices=["json", "markdown"],
        help="Output format for processed records",
    )
    parser.add_argument(
        "--summary-log",
        default=None,
        help="Append each successful summary to this JSON Lines file",
    )
    parser.add_argument(
        "--archive-dir",
        default=None,
        help="Store the full extracted text of each page in this directory",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=4,
        help="Maximum number of URLs processed concurrently",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (defaults to LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def _build_sinks(args: argparse.Namespace) -> List[RecordSink]:
    sinks: List[RecordSink] = []
    if args.summary_log:
        sinks.append(JsonlSummarySink(args.summary_log))
    if args.archive_dir:
        sinks.append(TextArchiveSink(args.archive_dir))
    return sinks


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(override=False)
    args = parse_args(argv)
    configure_logging(level=args.log_level)
    logger = get_logger("digest.cli")

    try:
        config = load_config(Path(args.config) if args.config else None, required=bool(args.config))
    except ConfigError as exc:
        logger.error("Failed to load configuration: %s", exc)
        return 2

    orch = Orchestrator(config, sinks=_build_sinks(args))
    outcomes = orch.process_many(args.urls, max_workers=args.workers)

    for outcome in outcomes:
        if outcome.blog is not None:
            text = format_markdown(outcome.blog) if args.format == "markdown" else format_json(outcome.blog)
        else:
            body = {"url": outcome.url, **outcome.error.to_payload()}
            text = json.dumps(body, ensure_ascii=False, indent=2)
        sys.stdout.write(text + "\n")

    return 0 if all(o.ok for o in outcomes) else 1


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    raise SystemExit(main())
