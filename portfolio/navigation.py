# portfolio/navigation.py: tab navigation, keyboard shortcuts, deep links
# -------------------------------------------------------------------------

from __future__ import annotations
import asyncio
from typing import MutableMapping, Optional

import structlog
from bs4 import Tag

from portfolio.config import DEEP_LINK_DELAY, DEFAULT_SECTION
from portfolio.page import Document, Event, KeyEvent, has_class
from portfolio.tasks import BackgroundTasks

logger = structlog.get_logger()

NAV_TAB = ".nav-tab"
SECTION = ".section"
PREV_KEYS = {"ArrowLeft", "ArrowUp"}
NEXT_KEYS = {"ArrowRight", "ArrowDown"}
DIGIT_KEYS = {"1", "2", "3", "4", "5"}


# -----------------------------
# Address (fragment holder)
# -----------------------------
class Address:
    """The page address as far as navigation cares: just the fragment.

    The fragment is only ever replaced in place, never pushed as a new
    history entry.
    """

    def __init__(self, fragment: str = ""):
        self._fragment = fragment.lstrip("#")

    @property
    def fragment(self) -> str:
        return self._fragment

    def replace_fragment(self, value: str) -> None:
        self._fragment = value.lstrip("#")


class MappingAddress(Address):
    """Fragment stored under one key of a mutable mapping (e.g. query params)."""

    def __init__(self, mapping: MutableMapping, key: str = "section"):
        self.mapping = mapping
        self.key = key

    @property
    def fragment(self) -> str:
        return str(self.mapping.get(self.key) or "").lstrip("#")

    def replace_fragment(self, value: str) -> None:
        self.mapping[self.key] = value.lstrip("#")


# -----------------------------
# Manager
# -----------------------------
class NavigationManager:
    def __init__(self, document: Document, address: Optional[Address] = None,
                 default_section: str = DEFAULT_SECTION):
        self.document = document
        self.address = address if address is not None else Address()
        self.default_section = default_section
        self.current_section = default_section
        self.tasks = BackgroundTasks()

    def initialize(self) -> None:
        self.bind_events()
        self.switch_to_section(self.default_section)

    def bind_events(self) -> None:
        for tab in self.document.select(NAV_TAB):
            self.document.on("click", self._on_tab_click, target=tab)

    def _on_tab_click(self, event: Event) -> None:
        event.prevent_default()
        section = event.target.get("data-section") if event.target is not None else None
        if section:
            self.switch_to_section(section)

    def _find_tab(self, section_id: str) -> Optional[Tag]:
        return next(
            (el for el in self.document.select("[data-section]")
             if el.get("data-section") == section_id),
            None,
        )

    def switch_to_section(self, section_id: str) -> bool:
        """Activate the tab/section pair for section_id.

        Unknown ids leave the page untouched and return False.
        """
        active_tab = self._find_tab(section_id)
        active_section = self.document.get_element_by_id(section_id)
        if active_tab is None or active_section is None:
            logger.debug("Unknown section", section=section_id)
            return False

        for tab in self.document.select(NAV_TAB):
            self.document.remove_class(tab, "active")
        for section in self.document.select(SECTION):
            self.document.remove_class(section, "active")

        self.document.add_class(active_tab, "active")
        self.document.add_class(active_section, "active")
        self.current_section = section_id
        self.animate_content(active_section)
        self.address.replace_fragment(section_id)
        return True

    def animate_content(self, section: Tag) -> None:
        # transitions are driven by the stylesheet once .active lands
        pass

    # -----------------------------
    # Keyboard
    # -----------------------------
    def bind_keyboard(self) -> None:
        self.document.on("keydown", self.handle_keydown)

    def handle_keydown(self, event: KeyEvent) -> None:
        if event.has_modifier:
            return
        tabs = self.document.select(NAV_TAB)
        if not tabs:
            return
        current = next((i for i, t in enumerate(tabs) if has_class(t, "active")), -1)

        target: Optional[int] = None
        if event.key in PREV_KEYS:
            event.prevent_default()
            target = current - 1 if current > 0 else len(tabs) - 1
        elif event.key in NEXT_KEYS:
            event.prevent_default()
            target = current + 1 if 0 <= current < len(tabs) - 1 else 0
        elif event.key in DIGIT_KEYS:
            event.prevent_default()
            num = int(event.key) - 1
            if num < len(tabs):
                target = num

        if target is not None:
            self.document.click(tabs[target])

    # -----------------------------
    # Deep links
    # -----------------------------
    def schedule_deep_link(self, section_id: Optional[str] = None,
                           delay: float = DEEP_LINK_DELAY) -> None:
        """Activate the linked section after a short delay.

        Pass the fragment captured before initialize() ran; initialize()
        rewrites the address to the default section.
        """
        if section_id is None:
            section_id = self.address.fragment
        section_id = section_id.lstrip("#")
        if section_id:
            self.tasks.spawn(self._deferred_switch(section_id, delay))

    async def _deferred_switch(self, section_id: str, delay: float) -> None:
        await asyncio.sleep(delay)
        self.switch_to_section(section_id)

    async def settle(self) -> None:
        await self.tasks.drain()
