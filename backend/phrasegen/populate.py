#!/usr/bin/env python3
"""Run one sentence generation cycle immediately, outside the web server.

Usage:
    python -m phrasegen.populate
    python -m phrasegen.populate --mock --log-level DEBUG
"""

import argparse
import asyncio
import sys

from .db import Base, engine
from .errors import GenerationError
from .logging_setup import setup_logging
from .main import build_scheduler
from .settings import settings


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Regenerate the pre-generated sentence cache for all vocab groups")
    parser.add_argument("--mock", action="store_true", help="Use the offline sentence generator instead of Gemini")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level (default: %(default)s)")
    parser.add_argument("--log-file", default=settings.log_file, help="Optional log file path")
    return parser.parse_args(argv)


async def _run(config) -> bool:
    scheduler = build_scheduler(config)
    try:
        return await scheduler.trigger_generation()
    finally:
        await scheduler.orchestrator.oracle.aclose()


def main(argv=None) -> int:
    args = parse_args(argv)
    logger = setup_logging(args.log_level.upper(), args.log_file)
    config = settings.model_copy(update={"use_mock_ai": True}) if args.mock else settings
    Base.metadata.create_all(bind=engine)
    try:
        asyncio.run(_run(config))
    except GenerationError as e:
        logger.error(f"Generation failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
