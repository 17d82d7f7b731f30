"""
Seed job entry point.

Usage:
    python -m notes_service.seed [OPTIONS]

Options:
    --count N           Number of notes to insert (default: SEED_COUNT)
    --environment ENV   development, staging or production (default: ENVIRONMENT)
"""
from __future__ import annotations

import argparse
import sys

from ..config import Environment, get_settings
from ..logging_config import configure_logging
from .seeder import run_seed


def main() -> int:
    """Main entry point for the seed job."""
    parser = argparse.ArgumentParser(
        description="Populate the notes table with generated notes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Reset and seed using the configured environment
    python -m notes_service.seed

    # Append ten notes without clearing (staging behaviour)
    python -m notes_service.seed --environment staging --count 10
        """,
    )

    parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Number of notes to insert (default: from config)",
    )
    parser.add_argument(
        "--environment",
        type=str,
        default=None,
        help="Deployment environment (default: from config)",
    )

    args = parser.parse_args()

    settings = get_settings()
    if args.environment:
        settings = settings.model_copy(
            update={"environment": Environment.parse(args.environment)}
        )

    configure_logging(settings.log_level, settings.log_format)
    return run_seed(settings, count=args.count)


if __name__ == "__main__":
    sys.exit(main())
