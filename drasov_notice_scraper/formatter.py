# drasov_notice_scraper/formatter.py

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from .models import Attachment, Entry

# English weekday abbreviations, Monday first
WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def format_date(value: Optional[date]) -> str:
    """Render a date as ``Mon 04.03.2024``, or ``-`` when it is missing."""
    if value is None:
        return "-"
    return f"{WEEKDAYS[value.weekday()]} {value:%d.%m.%Y}"


def _format_attachment(attachment: Attachment) -> str:
    return f"{attachment.filename}: {attachment.url}"


def format_entry(entry: Entry) -> str:
    """Render a single notice, one field per line."""
    lines = [
        f"Title: {entry.title}",
        f"Published on: {format_date(entry.published_on)}",
        f"Published until: {format_date(entry.published_until)}",
        f"URL: {entry.entry_url}",
    ]

    if entry.attachments:
        lines.append("Attachments:")
        lines.extend(f"  {_format_attachment(a)}" for a in entry.attachments)

    return "\n".join(lines) + "\n"


def format_entries(entries: Iterable[Entry]) -> str:
    """Render notices separated by a blank line."""
    return "\n".join(format_entry(entry) for entry in entries)
