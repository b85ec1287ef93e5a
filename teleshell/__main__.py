"""
Command line entry point.

    python -m teleshell gateway          # run the Telegram bot
    python -m teleshell preview out.txt  # show how text would be chunked
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from loguru import logger
from pydantic import ValidationError

from teleshell import __version__
from teleshell.config.schema import Config
from teleshell.segment import LimitPolicy, segment
from teleshell.utils.logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="teleshell", description="Run shell commands from a Telegram chat")
    parser.add_argument("--version", action="version", version=f"teleshell {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    gateway = sub.add_parser("gateway", help="Start the Telegram bot")
    gateway.add_argument("--debug", action="store_true", help="Verbose logging")

    preview = sub.add_parser("preview", help="Print the chunks a text would be split into")
    preview.add_argument("file", nargs="?", help="Input file (default: stdin)")
    preview.add_argument("--max-length", type=int, default=None, help="Max code units per chunk")
    preview.add_argument("--max-count", type=int, default=None, help="Max chunks per message")

    return parser.parse_args(argv)


def load_config() -> Config:
    try:
        return Config()
    except ValidationError as exc:
        problems = "\n".join(
            f"  - {'.'.join(str(p) for p in e['loc']) or '?'}: {e['msg']}"
            for e in exc.errors()
        )
        print(f"Config validation failed:\n{problems}", file=sys.stderr)
        sys.exit(1)


async def run_gateway(config: Config) -> None:
    from teleshell.channels.telegram import TelegramChannel

    channel = TelegramChannel(config)
    try:
        await channel.start()
    finally:
        await channel.stop()


def preview(args: argparse.Namespace, config: Config) -> int:
    if args.file:
        with open(args.file, encoding="utf-8") as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    defaults = config.limit_policy()
    try:
        limits = LimitPolicy(
            max_chunk_length=args.max_length if args.max_length is not None else defaults.max_chunk_length,
            max_chunk_count=args.max_count if args.max_count is not None else defaults.max_chunk_count,
        )
    except ValueError as e:
        print(f"Invalid limits: {e}", file=sys.stderr)
        return 2

    result = segment(text, limits=limits)
    print(json.dumps({
        "truncated": result.truncated,
        "chunks": [{"text": c.text} for c in result],
    }, ensure_ascii=False, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config = load_config()

    if args.command == "preview":
        return preview(args, config)

    setup_logging(debug=args.debug or config.debug)
    try:
        asyncio.run(run_gateway(config))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
