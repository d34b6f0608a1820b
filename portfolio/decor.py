# portfolio/decor.py: load-time fade-in + hover icon swap
# ---------------------------------------------------------

from __future__ import annotations
import asyncio
from typing import List

import structlog
from bs4 import Tag

from portfolio.config import FADE_STEP
from portfolio.page import Document
from portfolio.tasks import BackgroundTasks

logger = structlog.get_logger()

FADE_TARGETS = ".project-card, .about-content, .contact-content"
HOVER_ICONS = ".fiverr-icon, .fiverr-contact-icon"
ICON_IDLE = "icons/fiverr-black.svg"
ICON_HOVER = "icons/fiverr-white.svg"


def mark_fully_loaded(document: Document) -> None:
    document.add_class(document.body, "fully-loaded")


def schedule_fade_in(document: Document, tasks: BackgroundTasks, step: float = FADE_STEP) -> List[Tag]:
    """Queue .fade-in for each card-like element, index * step seconds apart."""
    targets = document.select(FADE_TARGETS)
    tasks.spawn_all(_fade_in_later(document, el, index * step) for index, el in enumerate(targets))
    return targets


async def _fade_in_later(document: Document, el: Tag, delay: float) -> None:
    await asyncio.sleep(delay)
    document.add_class(el, "fade-in")


def bind_hover_icons(document: Document, idle: str = ICON_IDLE, hover: str = ICON_HOVER) -> int:
    bound = 0
    for icon in document.select(HOVER_ICONS):
        link = icon.find_parent("a")
        if link is None:
            logger.debug("Hover icon outside a link", icon=str(icon))
            continue
        document.on("mouseenter", lambda _e, icon=icon: document.set_attribute(icon, "src", hover), target=link)
        document.on("mouseleave", lambda _e, icon=icon: document.set_attribute(icon, "src", idle), target=link)
        bound += 1
    return bound
