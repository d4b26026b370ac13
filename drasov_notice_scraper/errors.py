"""Exceptions raised when the notice board cannot be scraped."""


class ScrapeError(Exception):
    """Base class for fatal scraping conditions."""


class DateFormatError(ScrapeError, ValueError):
    """A date string does not look like ``D. M. YYYY``."""


class MarkupError(ScrapeError):
    """The page markup does not have the expected shape."""


class InconsistentStateError(ScrapeError):
    """A detail page was fetched for a URL with no registered entry."""


class ForbiddenDomainError(ScrapeError):
    """A URL points outside of the allowed domains."""
