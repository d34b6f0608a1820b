"""Bilingual portfolio site: page model, language and section managers."""

from portfolio.config import Settings
from portfolio.content import ContentRepository, Locale
from portfolio.localization import LanguageManager
from portfolio.navigation import Address, NavigationManager
from portfolio.page import Document, KeyEvent
from portfolio.preferences import PreferenceStore
from portfolio.site import PortfolioSite

__version__ = "0.1.0"

__all__ = [
    "Address",
    "ContentRepository",
    "Document",
    "KeyEvent",
    "LanguageManager",
    "Locale",
    "NavigationManager",
    "PortfolioSite",
    "PreferenceStore",
    "Settings",
]
