"""Entrypoint for the Drasov notice board scraper."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from requests.exceptions import RequestException

from .config import DEFAULT_DAYS, get_settings
from .crawler import scrape_notice_board
from .errors import ScrapeError
from .filters import cutoff_date, since_including
from .formatter import format_entries

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="List notices from the www.drasov.cz notice board")
    parser.add_argument(
        "--days",
        type=int,
        default=DEFAULT_DAYS,
        help="filter news entries published in the last N days",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the scraper and print the matching notices."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )
    args = parse_args(argv)

    try:
        settings = get_settings(args.days)
    except ValueError as exc:
        LOGGER.error("Configuration error: %s", exc)
        return 1

    since = cutoff_date(settings.days)

    try:
        entries = scrape_notice_board(settings)
    except RequestException as exc:
        LOGGER.error("Failed to fetch notice board: %s", exc)
        return 1
    except ScrapeError as exc:
        LOGGER.error("Failed to parse notice board: %s", exc)
        return 1

    selected = since_including(entries.values(), since)
    if selected:
        print(format_entries(selected))
    else:
        LOGGER.info("No notices published since %s", since)
    return 0


if __name__ == "__main__":
    sys.exit(main())
