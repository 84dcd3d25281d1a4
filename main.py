"""
CLI interface for listing every video on a YouTube channel.
"""

import asyncio
import argparse
import logging
import sys
from typing import Optional, List

from chains.listing_chain import listing_chain
from config.settings import get_settings
from tools.output_tools import render_video_list

# Setup logging
logger = logging.getLogger(__name__)

# Exit codes per error_type
EXIT_CODES = {
    "resolution": 2,
    "format": 3,
    "remote": 4,
}


def print_error(message: str) -> None:
    """Print error message to stderr."""
    print(f"[ERROR] {message}", file=sys.stderr)


def print_warning(message: str) -> None:
    """Print warning message to stderr."""
    print(f"[WARNING] {message}", file=sys.stderr)


def error_message(result: dict, channel_url: str) -> str:
    """Tailored message for a failed listing result."""
    error_type = result.get("error_type")
    details = "; ".join(result.get("errors", [])) or "Unknown error"

    if error_type == "resolution":
        return (
            f"Could not tell which channel {channel_url} refers to. "
            "Use a /user/, /channel/, /c/ or /@ channel URL."
        )
    if error_type == "format":
        return f"YouTube returned a video duration that could not be parsed: {details}"
    if error_type == "remote":
        status_code = result.get("status_code")
        if status_code:
            return f"YouTube API request failed with HTTP {status_code}: {details}"
        return f"YouTube API request failed: {details}"
    return details


async def list_command(
    channel_url: str,
    output_type: str,
    handle_strategy: Optional[str] = None,
    max_concurrency: Optional[int] = None
) -> int:
    """List a channel's videos on stdout and return the exit code."""
    result = await listing_chain.execute_listing_workflow(
        channel_url,
        handle_strategy=handle_strategy,
        max_concurrency=max_concurrency
    )

    if not result["success"]:
        print_error(error_message(result, channel_url))
        return EXIT_CODES.get(result.get("error_type"), 1)

    if not result["videos"]:
        print_warning(f"No videos found for {channel_url}")
        return 0

    print(render_video_list(result["videos"], output_type))
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        description="List every video uploaded to a YouTube channel",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py https://www.youtube.com/user/nismotv2013/videos
  python main.py https://www.youtube.com/channel/UCy0tKL1T7wFoYcxCe0xjN6Q -o single
  python main.py https://www.youtube.com/@LinusTechTips -o tsv > videos.tsv

The API key is read from YOUTUBE_API_KEY (or .env), else from the file named
by YOUTUBE_API_KEY_FILE (default: client-key).
        """
    )

    parser.add_argument("channel_url", help="Channel URL (/user/, /channel/, /c/ or /@ form)")
    parser.add_argument(
        "-o", "--output",
        choices=["multi", "single", "tsv"],
        default=None,
        help="Output type (default: multi, or OUTPUT_TYPE from the environment)"
    )
    parser.add_argument(
        "--handle-strategy",
        choices=["search", "for_handle"],
        default=None,
        help="How to resolve /c/ and /@ handles (default: search)"
    )
    parser.add_argument(
        "--max-concurrency",
        type=int,
        default=None,
        help="Maximum concurrent video detail requests"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override the configured log level"
    )

    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.max_concurrency is not None and args.max_concurrency < 1:
        parser.error("--max-concurrency must be at least 1")

    try:
        settings = get_settings()
    except ValueError as e:
        print_error(f"Invalid configuration: {e}")
        return 1

    if args.log_level:
        logging.getLogger().setLevel(args.log_level)

    try:
        return await list_command(
            args.channel_url,
            output_type=args.output or settings.output_type,
            handle_strategy=args.handle_strategy,
            max_concurrency=args.max_concurrency
        )
    except ValueError as e:
        print_error(str(e))
        return 1


if __name__ == "__main__":
    # Run the async main function
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print_error("Operation cancelled by user")
        sys.exit(130)
