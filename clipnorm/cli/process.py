"""Command-line access to the clip content pipeline.

Usage:
    python -m clipnorm.cli normalize scrape.md
    python -m clipnorm.cli blocks scrape.md
    cat urls.txt | python -m clipnorm.cli images
    python -m clipnorm.cli process scrape.md --image https://cdn.example.com/a.jpg
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, TextIO

from clipnorm.config import load_config
from clipnorm.core.block_parser import ThreadBlockParser
from clipnorm.core.image_filter import ImageURLFilter
from clipnorm.core.logging_utils import setup_json_logging
from clipnorm.core.pipeline import ClipContentProcessor
from clipnorm.core.threads_normalizer import ThreadsTextNormalizer

logger = logging.getLogger(__name__)

__all__ = ["main", "parse_args"]

EXIT_OK = 0
EXIT_INPUT_ERROR = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="clipnorm",
        description="Normalize scraped social-feed content for clip saving",
        allow_abbrev=False,
    )
    parser.add_argument(
        "command",
        choices=["normalize", "blocks", "images", "process"],
        help="normalize: flat text; blocks: structured JSON; "
        "images: filter URLs (one per line); process: full clip payload.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Input file path, or '-' to read stdin (default).",
    )
    parser.add_argument(
        "--image",
        action="append",
        default=[],
        metavar="URL",
        help="Extra candidate image URL for 'process' (repeatable).",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level for this session.",
    )
    return parser.parse_args(argv)


def _read_input(source: str, stdin: TextIO) -> str:
    if source == "-":
        return stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _dump_json(payload: Any, stdout: TextIO) -> None:
    json.dump(payload, stdout, ensure_ascii=False, indent=2)
    stdout.write("\n")


def run(args: argparse.Namespace, stdin: TextIO, stdout: TextIO) -> int:
    config = load_config()
    setup_json_logging(
        level=args.log_level or config.runtime.log_level,
        log_file=config.runtime.log_file,
    )

    try:
        raw = _read_input(args.input, stdin)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("cli_input_unreadable", extra={"input": args.input, "error": str(exc)})
        return EXIT_INPUT_ERROR

    processor = ClipContentProcessor(limits=config.content_limits)
    text, _ = processor.bound_input(raw)

    if args.command == "normalize":
        stdout.write(ThreadsTextNormalizer().normalize(text))
        stdout.write("\n")
    elif args.command == "blocks":
        _dump_json(ThreadBlockParser().parse(text).to_dict(), stdout)
    elif args.command == "images":
        urls = [line.strip() for line in text.splitlines() if line.strip()]
        _dump_json(ImageURLFilter().filter(urls), stdout)
    else:
        _dump_json(processor.process(raw, args.image).to_dict(), stdout)

    logger.info("cli_command_completed", extra={"command": args.command})
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``python -m clipnorm.cli``."""
    args = parse_args(argv)
    return run(args, sys.stdin, sys.stdout)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
