"""Filter scraped notices by their publication date."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional

from .models import Entry

LOGGER = logging.getLogger(__name__)


def cutoff_date(days: int, reference_date: Optional[date] = None) -> date:
    """Return the date ``days`` days before ``reference_date`` (default: today)."""
    today = reference_date or date.today()
    try:
        return today - timedelta(days=days)
    except OverflowError:
        return date.min


def since_including(entries: Iterable[Entry], cutoff: date) -> List[Entry]:
    """Return the entries published on ``cutoff`` or later, keeping their order."""
    entries = list(entries)
    selected = [entry for entry in entries if entry.published_on >= cutoff]

    LOGGER.info(
        "%d notices in total, %d published since %s",
        len(entries),
        len(selected),
        cutoff,
    )
    return selected
