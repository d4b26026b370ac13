"""Fetch and parse notices from the Drasov notice board."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import FIRST_EXCEPTION, Executor, Future, ThreadPoolExecutor, wait
from datetime import date
from typing import Dict, Iterable, Iterator, List, Optional
from urllib.parse import urljoin, urlparse

import requests
from bs4 import BeautifulSoup

from .config import Settings
from .errors import DateFormatError, ForbiddenDomainError, InconsistentStateError, MarkupError
from .models import Attachment, Entry

LOGGER = logging.getLogger(__name__)

EXPECTED_DATE_FIELDS = 2
MAX_REDIRECTS = 10


def fetch_html(
    url: str, timeout: float = 10, allowed_domains: Optional[Iterable[str]] = None
) -> str:
    """Retrieve the HTML contents of the given URL.

    Redirects are followed by hand so that every hop can be checked against
    ``allowed_domains``; a hop outside of them raises ``ForbiddenDomainError``.
    """
    headers = {
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/118.0.0.0 Safari/537.36"
        )
    }
    for _ in range(MAX_REDIRECTS + 1):
        if allowed_domains is not None and not is_allowed_url(url, allowed_domains):
            raise ForbiddenDomainError(f"Refusing to visit {url}: domain is not allowed")

        LOGGER.info("Visiting %s", url)
        response = requests.get(url, headers=headers, timeout=timeout, allow_redirects=False)
        if not response.is_redirect:
            response.raise_for_status()
            return response.text

        url = urljoin(url, response.headers["Location"])

    raise requests.TooManyRedirects(f"Exceeded {MAX_REDIRECTS} redirects")


def is_allowed_url(url: str, allowed_domains: Iterable[str]) -> bool:
    host = (urlparse(url).hostname or "").lower()
    return host in {domain.lower() for domain in allowed_domains}


def parse_date(date_text: str) -> date:
    """Parse a ``D. M. YYYY`` date such as ``1. 12. 2021``."""
    parts = date_text.split(".")
    if len(parts) != 3:
        raise DateFormatError(f"Unexpected date format: {date_text!r}")

    components = [part.strip() for part in parts]
    if not all(component.isdigit() for component in components):
        raise DateFormatError(f"Unexpected date format: {date_text!r}")

    try:
        day, month, year = (int(component) for component in components)
    except ValueError as exc:
        raise DateFormatError(f"Unexpected date format: {date_text!r}") from exc

    try:
        return date(year, month, day)
    except ValueError as exc:
        raise DateFormatError(f"Invalid date: {date_text!r}") from exc


class EntryStore:
    """Thread-safe mapping of entry URL to Entry, kept in discovery order."""

    def __init__(self) -> None:
        self._entries: Dict[str, Entry] = {}
        self._lock = threading.Lock()

    def register(self, entry: Entry) -> bool:
        """Store an entry, replacing any earlier one with the same URL.

        Returns True the first time a URL is seen. A replacing entry takes
        over the attachments already collected for its URL.
        """
        with self._lock:
            previous = self._entries.get(entry.entry_url)
            if previous is not None:
                LOGGER.debug("Duplicate entry for %s, keeping the last one", entry.entry_url)
                entry.attachments.extend(previous.attachments)
            self._entries[entry.entry_url] = entry
            return previous is None

    def add_attachments(self, entry_url: str, attachments: Iterable[Attachment]) -> None:
        with self._lock:
            entry = self._entries.get(entry_url)
            if entry is None:
                raise InconsistentStateError(f"No entry registered for URL {entry_url}")
            entry.attachments.extend(attachments)

    def snapshot(self) -> Dict[str, Entry]:
        with self._lock:
            return dict(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def _parse_item_dates(item) -> List[date]:
    dates: list[date] = []
    for col in item.select(".c-office-board__col-date"):
        spans = col.find_all("span")
        if len(spans) < 2:
            raise MarkupError(f"Date field without value span: {col.get_text(strip=True)!r}")
        dates.append(parse_date(spans[1].get_text(strip=True)))

    if len(dates) != EXPECTED_DATE_FIELDS:
        raise MarkupError(
            f"Expected {EXPECTED_DATE_FIELDS} date fields per notice, found {len(dates)}"
        )
    return dates


def parse_listing(html: str, site_url: str) -> Iterator[Entry]:
    """Yield entries from the notice board listing page in document order."""
    soup = BeautifulSoup(html, "html.parser")

    for item in soup.select(".c-office-board .c-office-board__content-item"):
        published_on, published_until = _parse_item_dates(item)

        name = item.select_one(".c-office-board__col-name-content")
        link = name.find("a", href=True) if name else None
        if link is None:
            raise MarkupError("Notice without a title link")

        yield Entry(
            published_on=published_on,
            published_until=published_until,
            title="".join(a.get_text() for a in name.find_all("a")).strip(),
            entry_url=urljoin(site_url, link["href"].strip()),
        )


def parse_attachments(html: str) -> List[Attachment]:
    """Parse file attachments from a notice detail page."""
    soup = BeautifulSoup(html, "html.parser")
    attachments: list[Attachment] = []

    for card in soup.select(".c-card"):
        for wrapper in card.select(".c-files-wrapper"):
            heading = wrapper.find("h3")
            link = wrapper.find("a")
            attachments.append(
                Attachment(
                    filename=heading.get_text(strip=True) if heading else "",
                    url=(link.get("href") or "").strip() if link else "",
                )
            )

    return attachments


def fetch_detail(entry_url: str, store: EntryStore, settings: Settings) -> None:
    """Fetch a detail page and attach its files to the registered entry."""
    html = fetch_html(
        entry_url, timeout=settings.request_timeout, allowed_domains=settings.allowed_domains
    )
    attachments = parse_attachments(html)
    store.add_attachments(entry_url, attachments)
    LOGGER.debug("Found %d attachments on %s", len(attachments), entry_url)


def fetch_listing(settings: Settings, store: EntryStore, executor: Executor) -> List[Future]:
    """Fetch the listing page, register its entries and schedule detail fetches."""
    if not is_allowed_url(settings.notice_board_url, settings.allowed_domains):
        raise ForbiddenDomainError(
            f"Notice board URL {settings.notice_board_url} is outside of {settings.allowed_domains}"
        )

    html = fetch_html(
        settings.notice_board_url,
        timeout=settings.request_timeout,
        allowed_domains=settings.allowed_domains,
    )

    futures: list[Future] = []
    for entry in parse_listing(html, settings.site_url):
        if not store.register(entry):
            continue

        if not is_allowed_url(entry.entry_url, settings.allowed_domains):
            LOGGER.warning("Not following %s: domain is not allowed", entry.entry_url)
            continue

        futures.append(executor.submit(fetch_detail, entry.entry_url, store, settings))

    return futures


def scrape_notice_board(settings: Settings) -> Dict[str, Entry]:
    """Scrape all notices with their attachments, keyed by entry URL."""
    store = EntryStore()

    with ThreadPoolExecutor(max_workers=settings.max_workers) as executor:
        try:
            futures = fetch_listing(settings, store, executor)
        except Exception:
            executor.shutdown(cancel_futures=True)
            raise

        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        for future in pending:
            future.cancel()

        for future in done:
            future.result()

    LOGGER.info("Scraped %d notices", len(store))
    return store.snapshot()
