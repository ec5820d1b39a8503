"""
Command-line entry point.

Usage:
    recommend "An episode Elon Musk would enjoy"
    recommend --threshold 0.3 --count 3 an episode about space travel
    python -m recommender "a calm episode about gardening"

Prints the recommendation to stdout. On failure prints the error kind and
message to stderr and exits non-zero (2 for configuration errors, 1 otherwise).

Settings are loaded inside main() so that a misconfigured environment is
reported like any other configuration error instead of a traceback.
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from recommender.errors import ConfigurationError, RecommenderError
from recommender.utils.constants import DEFAULT_MATCH_COUNT, DEFAULT_MATCH_THRESHOLD

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="recommend",
        description="Recommend the stored episode that best fits a free-text query.",
    )
    parser.add_argument(
        "query",
        nargs="+",
        help="What you are looking for (words are joined with spaces)",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help=f"Minimum similarity in [0, 1] (default: MATCH_THRESHOLD or {DEFAULT_MATCH_THRESHOLD})",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=None,
        help=f"Number of candidates requested from the store (default: MATCH_COUNT or {DEFAULT_MATCH_COUNT})",
    )
    default_level = os.getenv("LOG_LEVEL", "INFO").upper()
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=default_level if default_level in LOG_LEVELS else "INFO",
        help="Logging level (default: %(default)s)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    query = " ".join(args.query)

    try:
        # Importing the pipeline loads and validates recommender.config
        from recommender.services.pipeline import build_pipeline

        pipeline = build_pipeline(match_threshold=args.threshold, match_count=args.count)
        recommendation = asyncio.run(pipeline.recommend(query))
    except ConfigurationError as e:
        print(f"error: ConfigurationError: {e}", file=sys.stderr)
        return 2
    except (RecommenderError, ValueError) as e:
        print(f"error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    print(recommendation)
    return 0


if __name__ == "__main__":
    sys.exit(main())
