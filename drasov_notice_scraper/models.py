"""Data models for the Drasov notice board scraper."""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional


@dataclass(frozen=True)
class Attachment:
    """A downloadable file linked from a notice detail page."""

    filename: str
    url: str


@dataclass
class Entry:
    """Represents a single notice posted on the municipal notice board."""

    published_on: date
    published_until: Optional[date]
    title: str
    entry_url: str
    attachments: List[Attachment] = field(default_factory=list)
