"""Configuration handling for the notice board scraper."""

from dataclasses import dataclass
from typing import Tuple


DEFAULT_SITE_URL = "https://www.drasov.cz"
DEFAULT_NOTICE_BOARD_URL = f"{DEFAULT_SITE_URL}/uredni-deska"
DEFAULT_ALLOWED_DOMAINS = ("drasov.cz", "www.drasov.cz")
DEFAULT_DAYS = 30
DEFAULT_REQUEST_TIMEOUT = 10
DEFAULT_MAX_WORKERS = 8


@dataclass
class Settings:
    """Settings for a single scrape run."""

    days: int = DEFAULT_DAYS
    site_url: str = DEFAULT_SITE_URL
    notice_board_url: str = DEFAULT_NOTICE_BOARD_URL
    allowed_domains: Tuple[str, ...] = DEFAULT_ALLOWED_DOMAINS
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_workers: int = DEFAULT_MAX_WORKERS


def get_settings(days: int = DEFAULT_DAYS) -> Settings:
    """Build settings for a run, raising on values that make no sense."""
    if isinstance(days, bool) or not isinstance(days, (int, str)):
        raise ValueError("days must be an integer")

    try:
        days = int(days)
    except (TypeError, ValueError) as exc:
        raise ValueError("days must be an integer") from exc

    if days < 0:
        raise ValueError("days must not be negative")

    return Settings(days=days)
