# portfolio/site.py: page lifecycle: startup, load, shared settle
# ----------------------------------------------------------------

from __future__ import annotations
from typing import Optional

import structlog

from portfolio import decor
from portfolio.config import Settings
from portfolio.content import ContentRepository, source_from_base
from portfolio.localization import LanguageManager
from portfolio.navigation import Address, NavigationManager
from portfolio.page import Document, KeyEvent
from portfolio.preferences import PreferenceStore
from portfolio.tasks import BackgroundTasks

logger = structlog.get_logger()


class PortfolioSite:
    """Owns the page model and both managers for one visitor session."""

    def __init__(self, document: Document, settings: Optional[Settings] = None,
                 content: Optional[ContentRepository] = None,
                 preferences: Optional[PreferenceStore] = None,
                 address: Optional[Address] = None):
        self.document = document
        self.settings = settings or Settings()
        self.content = content or ContentRepository(
            source_from_base(self.settings.content_base, self.settings.fetch_timeout))
        self.preferences = preferences or PreferenceStore()
        self.address = address if address is not None else Address()
        self.tasks = BackgroundTasks()
        self.language: Optional[LanguageManager] = None
        self.navigation: Optional[NavigationManager] = None
        self.started = False
        self.loaded = False

    def start(self) -> None:
        """Equivalent of DOMContentLoaded."""
        linked_section = self.address.fragment
        saved_lang = self.preferences.get_language()

        self.language = LanguageManager(self.document, self.content, self.preferences)
        self.navigation = NavigationManager(self.document, self.address, self.settings.default_section)
        self.language.initialize(saved_lang)
        self.navigation.initialize()
        self.navigation.bind_keyboard()

        if linked_section:
            self.navigation.schedule_deep_link(linked_section, self.settings.deep_link_delay)
        decor.bind_hover_icons(self.document)
        self.started = True
        logger.info("Portfolio started", lang=self.language.current_lang.value,
                    section=self.navigation.current_section, deep_link=linked_section or None)

    def on_load(self) -> None:
        """Equivalent of window load."""
        decor.mark_fully_loaded(self.document)
        decor.schedule_fade_in(self.document, self.tasks, self.settings.fade_step)
        self.loaded = True

    def press_key(self, key: str, **modifiers) -> KeyEvent:
        return self.document.dispatch(KeyEvent(key, **modifiers))

    async def settle(self) -> None:
        """Wait for content population, deep links and fade-ins."""
        if self.language is not None:
            await self.language.settle()
        if self.navigation is not None:
            await self.navigation.settle()
        await self.tasks.drain()
