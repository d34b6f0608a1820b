# portfolio/errors.py: error types shared by the page model and managers
# ------------------------------------------------------------------------

from __future__ import annotations
from typing import Optional


class PortfolioError(Exception):
    """Base class for every error raised by the portfolio package."""


class ContentUnavailable(PortfolioError):
    """A content file could not be used.

    Network failure, a non-success status and a malformed payload all end up
    here; callers never need to tell them apart.
    """

    def __init__(self, name: str, reason: str, previous_error: Optional[Exception] = None):
        super().__init__(f"{name}: {reason}")
        self.name = name
        self.reason = reason
        self.previous_error = previous_error


class UnsupportedLocale(PortfolioError, ValueError):
    def __init__(self, value: object):
        super().__init__(f"unsupported locale: {value!r}")
        self.value = value
