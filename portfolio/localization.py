# portfolio/localization.py: language switching + localized content
# --------------------------------------------------------------------
# set_language() updates the language controls and every bilingual
# element synchronously, then hands the content files (about paragraphs,
# project cards) to a background population. A population started for a
# language that is no longer current skips its page writes.
# --------------------------------------------------------------------

from __future__ import annotations
from typing import Dict, Optional, Tuple

import structlog
from bs4 import Tag

from portfolio.content import DEFAULT_LOCALE, ContentRepository, Locale, ProjectContent
from portfolio.errors import ContentUnavailable
from portfolio.page import Document, Event, has_class
from portfolio.preferences import PreferenceStore
from portfolio.tasks import BackgroundTasks

logger = structlog.get_logger()

LANG_BUTTON = ".lang-btn"
LOCALIZED = "[data-en][data-es]"
ABOUT_SLOTS = ("about-paragraph-1", "about-paragraph-2")
PROJECT_CARD = "[data-project]"

FALLBACK_ABOUT: Dict[Locale, Tuple[str, str]] = {
    Locale.EN: (
        "Jr. Game & Narrative Designer focused on creating meaningful player "
        "experiences through story, structure, and emotion.",
        "I've worked on small independent projects exploring different genres, "
        "always with the goal of making players feel something real.",
    ),
    Locale.ES: (
        "Jr. Game & Narrative Designer enfocado en crear experiencias significativas "
        "para los jugadores a través de la historia, la estructura y la emoción.",
        "He trabajado en pequeños proyectos independientes explorando diferentes "
        "géneros, siempre con el objetivo de hacer sentir algo real a quien juega.",
    ),
}


class LanguageManager:
    def __init__(self, document: Document, content: ContentRepository,
                 preferences: Optional[PreferenceStore] = None):
        self.document = document
        self.content = content
        self.preferences = preferences or PreferenceStore()
        self.current_lang: Locale = DEFAULT_LOCALE
        self.tasks = BackgroundTasks()
        self._generation = 0

    # -----------------------------
    # Wiring
    # -----------------------------
    def initialize(self, initial: Optional[Locale] = None) -> None:
        self.bind_events()
        self.set_language(initial or DEFAULT_LOCALE)

    def bind_events(self) -> None:
        for btn in self.document.select(LANG_BUTTON):
            self.document.on("click", self._on_lang_click, target=btn)

    def _on_lang_click(self, event: Event) -> None:
        # control ids look like "lang-es"
        target_id = event.target.get("id", "") if event.target is not None else ""
        _, _, code = target_id.partition("-")
        self.set_language(Locale.parse(code))

    # -----------------------------
    # Switching
    # -----------------------------
    def set_language(self, lang) -> None:
        lang = Locale.parse(lang)
        self.current_lang = lang
        self._generation += 1

        for btn in self.document.select(LANG_BUTTON):
            if btn.get("id") == f"lang-{lang.value}":
                self.document.add_class(btn, "active")
            else:
                self.document.remove_class(btn, "active")

        for el in self.document.select(LOCALIZED):
            text = el.get(lang.attribute)
            if text:
                self.document.set_text(el, text)

        self.tasks.spawn(self.load_external_content(lang, self._generation))
        self.preferences.set_language(lang)
        logger.debug("Language set", lang=lang.value)

    async def settle(self) -> None:
        """Wait for every content population still in flight."""
        await self.tasks.drain()

    def _is_stale(self, generation: Optional[int]) -> bool:
        return generation is not None and generation != self._generation

    async def load_external_content(self, lang: Locale, generation: Optional[int] = None) -> None:
        try:
            await self.populate_about_section(lang, generation)
            await self.populate_project_cards(lang, generation)
        except Exception as e:
            logger.warning("Failed to load external content", lang=lang.value, error=str(e))

    # -----------------------------
    # About
    # -----------------------------
    async def populate_about_section(self, lang, generation: Optional[int] = None) -> None:
        lang = Locale.parse(lang)
        paragraphs = []
        try:
            about = await self.content.about()
            paragraphs = about.for_locale(lang)
        except ContentUnavailable as e:
            logger.warning("Failed to load about content", name=e.name, reason=e.reason)

        if self._is_stale(generation):
            logger.debug("Discarding stale about content", lang=lang.value)
            return

        # a slot with no paragraph of its own gets the fallback, never the old language
        for index, slot_id in enumerate(ABOUT_SLOTS):
            text = paragraphs[index] if index < len(paragraphs) else ""
            slot = self.document.get_element_by_id(slot_id)
            if slot is not None:
                self.document.set_text(slot, text or FALLBACK_ABOUT[lang][index])

    # -----------------------------
    # Project cards
    # -----------------------------
    async def populate_project_cards(self, lang, generation: Optional[int] = None) -> None:
        lang = Locale.parse(lang)
        for card in self.document.select(PROJECT_CARD):
            project_id = card.get("data-project") or ""
            try:
                project = await self.content.project(project_id)
            except ContentUnavailable as e:
                logger.warning("Failed to load content for project", project=project_id, reason=e.reason)
                continue
            if self._is_stale(generation):
                logger.debug("Discarding stale project content", project=project_id, lang=lang.value)
                return
            self.apply_project(card, project, lang)

    def apply_project(self, card: Tag, project: ProjectContent, lang: Locale) -> None:
        for role, values in (("project-title", project.title),
                             ("project-genre", project.genre),
                             ("project-description", project.description)):
            text = values.get(lang)
            if not text:
                continue
            if has_class(card, role):
                self.document.set_text(card, text)
            for target in card.select(f".{role}"):
                self.document.set_text(target, text)

        generic = card.select(".project-link")
        if generic:
            href = project.link_for(lang)
            if href:
                for anchor in generic:
                    self.document.set_attribute(anchor, "href", href)
            return
        for loc in Locale:
            href = project.link_for(loc)
            if not href:
                continue
            for anchor in card.select(f".project-link-{loc.value}"):
                self.document.set_attribute(anchor, "href", href)
