"""Main module for the webp optimizer CLI."""

import sys
import json
import argparse
from typing import Any, Dict

from . import __version__
from .core import TranscodeConfig, WebpOptimizerError, get_logger
from .core.factories import PipelineFactory


def load_event(path: str) -> Dict[str, Any]:
    """Read an S3 notification event from a JSON file, or stdin for '-'."""
    if path == "-":
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as event_file:
        return json.load(event_file)


def run_process(args: argparse.Namespace) -> int:
    """Run one event file through the pipeline and print the summary."""
    logger = get_logger("webp-optimizer.cli")
    try:
        config = TranscodeConfig.from_env(
            quality=args.quality,
            derivative_prefix=args.prefix,
            max_workers=args.workers,
            unquote_keys=False if args.no_unquote else None,
            debug=args.debug or None,
        )

        event = load_event(args.event)
        orchestrator = PipelineFactory.create_orchestrator(config=config)
        result = orchestrator.process(event)
    except (OSError, ValueError, WebpOptimizerError) as e:
        logger.error(f"Processing failed: {e}")
        return 1

    print(json.dumps(result.to_summary(), indent=2))
    return 1 if result.fatal else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webp-optimizer",
        description="Transcode images named by S3 notifications to WebP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Replay a saved S3 event
  webp-optimizer process --event event.json

  # Higher quality, four records at a time
  webp-optimizer process --event event.json --quality 90 --workers 4

  # Show version
  webp-optimizer version
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    process_parser = subparsers.add_parser(
        "process", help="Process an S3 notification event"
    )
    process_parser.add_argument(
        "--event", required=True, help="Path to the event JSON file ('-' for stdin)"
    )
    process_parser.add_argument(
        "--quality", type=int, default=None, help="WebP quality 0-100 (default: 75)"
    )
    process_parser.add_argument(
        "--prefix", default=None, help="Derivative key prefix (default: optimized)"
    )
    process_parser.add_argument(
        "--workers", type=int, default=None, help="Records processed concurrently"
    )
    process_parser.add_argument(
        "--no-unquote",
        action="store_true",
        help="Use event keys verbatim instead of URL-decoding them",
    )
    process_parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )

    subparsers.add_parser("version", help="Show version information")
    return parser


def main() -> None:
    """Entry point for the webp-optimizer command-line interface."""
    parser = build_parser()
    args = parser.parse_args()

    if args.command == "process":
        sys.exit(run_process(args))
    elif args.command == "version":
        print("WebP Optimizer CLI")
        print(f"Version {__version__}")
        sys.exit(0)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
