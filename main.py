#!/usr/bin/env python3
"""Vibe: social content analysis pipeline powered by PydanticAI agents.

This CLI tool analyzes scraped social media records (TikTok, Instagram,
blogs, ...) and writes a structured JSON report with sentiment, category,
media-specific, trend and "vibe" analyses plus an overall score.

Commands:
    run         Analyze one record with a pipeline variant
    batch       Analyze a JSON list of records in rate-limited chunks
    classify    Print the detected content type (no model calls)
    status      Show configuration

Examples:
    python main.py run scraped.json                     # full variant
    python main.py run scraped.json --variant fast
    python main.py run scraped.json --type video --platform tiktok
    python main.py run scraped.json -o -                # print to stdout
    python main.py batch records.json --batch-size 3 --delay 2
    python main.py classify scraped.json

Environment:
    OPENAI_API_KEY: Required unless both models are local
    See config.py for all configuration options
"""

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from config import Config
from errors import ConfigurationError
from observability.logging import setup_logging

logger = logging.getLogger(__name__)


def _load_json(path: str) -> Any:
    """Read a JSON input file ('-' reads stdin)."""
    if path == "-":
        return json.load(sys.stdin)
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _write_output(payload: Any, output: str | None, default_path: Path) -> None:
    """Write JSON to --output, stdout ('-') or the default reports path."""
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output == "-":
        print(text)
        return
    path = Path(output) if output else default_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    logger.info("Report saved | path=%s", path)


def _run_stamp() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def cmd_run(args: argparse.Namespace, config: Config) -> int:
    """Analyze a single record.

    Args:
        args: Parsed command line arguments
        config: Application configuration

    Returns:
        Exit code (0 for success)
    """
    from pipeline import run

    raw_content = _load_json(args.input)
    try:
        report = asyncio.run(run(
            config,
            args.variant,
            raw_content,
            content_type=args.type,
            platform=args.platform,
            preferences=args.preferences or "",
        ))
    except KeyboardInterrupt:
        logger.info("Stopped by user (Ctrl+C)")
        return 130
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    platform = args.platform or (raw_content.get("platform") or "unknown")
    default_path = config.reports_dir / f"{_run_stamp()}_{platform}_{args.variant}.json"
    _write_output(report.to_dict(), args.output, default_path)
    return 0


def cmd_batch(args: argparse.Namespace, config: Config) -> int:
    """Analyze a JSON list of records.

    Returns:
        0 when every record succeeded or failed gracefully, 1 on bad input
    """
    from pipeline import run_batch

    if args.batch_size is not None:
        config.batch_size = args.batch_size
    if args.delay is not None:
        config.batch_delay_seconds = args.delay

    items = _load_json(args.input)
    try:
        results = asyncio.run(run_batch(
            config,
            items,
            content_type=args.type,
            platform=args.platform,
        ))
    except KeyboardInterrupt:
        logger.info("Stopped by user (Ctrl+C)")
        return 130
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    successful = sum(1 for r in results if r.success)
    logger.info("Batch complete | successful=%d/%d", successful, len(results))
    default_path = config.reports_dir / f"{_run_stamp()}_batch.json"
    _write_output([r.to_dict() for r in results], args.output, default_path)
    return 0


def cmd_classify(args: argparse.Namespace, config: Config) -> int:
    """Print the detected content type and the variant a batch would use."""
    from batch import VARIANT_FOR_CONTENT_TYPE
    from classifier import ContentClassifier

    content_type = ContentClassifier.from_config(config).classify(_load_json(args.input))
    print(json.dumps({
        "content_type": content_type.value,
        "variant": VARIANT_FOR_CONTENT_TYPE[content_type],
    }, indent=2))
    return 0


def cmd_status(args: argparse.Namespace, config: Config) -> int:
    """Display configuration.

    Returns:
        Exit code (0 for success)
    """
    from pipeline import VARIANTS

    status = {
        "config": {
            "analyzer_model": config.analyzer_model,
            "vibe_model": config.vibe_model,
            "analyzer_temperature": config.analyzer_temperature,
            "vibe_temperature": config.vibe_temperature,
            "analyzer_retries": config.analyzer_retries,
            "api_key_set": bool(config.openai_api_key),
            "batch_size": config.batch_size,
            "batch_delay_seconds": config.batch_delay_seconds,
            "video_ratio_threshold": config.video_ratio_threshold,
            "document_ratio_threshold": config.document_ratio_threshold,
            "document_min_chars": config.document_min_chars,
            "reports_dir": str(config.reports_dir),
            "enable_logfire": config.enable_logfire,
        },
        "variants": {name: list(stages) for name, stages in VARIANTS.items()},
        "config_error": config.validate(),
    }

    print(json.dumps(status, indent=2))
    return 0


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--type",
        choices=["video", "document", "mixed"],
        help="Content type (default: detected from the posts)",
    )
    parser.add_argument(
        "--platform",
        type=str,
        help="Platform label (default: the record's 'platform' field)",
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        help="Output JSON path, '-' for stdout (default: REPORTS_DIR)",
    )


def main() -> int:
    """Main entry point.

    Returns:
        Exit code
    """
    from pipeline import VARIANTS

    parser = argparse.ArgumentParser(
        description="Vibe: social content analysis pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run command
    run_parser = subparsers.add_parser("run", help="Analyze one record")
    run_parser.add_argument("input", help="JSON file with {data, platform, count, scrapedAt} ('-' for stdin)")
    run_parser.add_argument(
        "--variant",
        choices=list(VARIANTS),
        default="full",
        help="Pipeline variant (default: full)",
    )
    run_parser.add_argument(
        "--preferences",
        type=str,
        help="Free-text preferences for the vibe analysis",
    )
    _add_common_options(run_parser)

    # batch command
    batch_parser = subparsers.add_parser("batch", help="Analyze a JSON list of records")
    batch_parser.add_argument("input", help="JSON file with a list of records ('-' for stdin)")
    batch_parser.add_argument(
        "--batch-size",
        type=int,
        help="Records analyzed concurrently (default: BATCH_SIZE)",
    )
    batch_parser.add_argument(
        "--delay",
        type=float,
        help="Seconds to wait between chunks (default: BATCH_DELAY_SECONDS)",
    )
    _add_common_options(batch_parser)

    # classify command
    classify_parser = subparsers.add_parser("classify", help="Print the detected content type")
    classify_parser.add_argument("input", help="JSON file with one record ('-' for stdin)")

    # status command
    subparsers.add_parser("status", help="Show configuration")

    args = parser.parse_args()

    # Load configuration
    config = Config.load()

    # Setup logging
    setup_logging(config, verbose=args.verbose)

    # Validate configuration for commands that call models
    if args.command in ("run", "batch"):
        error = config.validate()
        if error:
            print(f"Configuration error: {error}", file=sys.stderr)
            return 1

    # Route to command handler
    commands = {
        "run": cmd_run,
        "batch": cmd_batch,
        "classify": cmd_classify,
        "status": cmd_status,
    }

    if args.command in commands:
        try:
            return commands[args.command](args, config)
        except KeyboardInterrupt:
            logger.info("Stopped by user (Ctrl+C)")
            return 130
        except Exception as e:
            logger.error("Command failed | cmd=%s error=%s", args.command, e, exc_info=True)
            print(f"Error: {e}", file=sys.stderr)
            return 1
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
