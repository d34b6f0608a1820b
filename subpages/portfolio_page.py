# subpages/portfolio_page.py: portfolio markup + data
# ------------------------------------------------------
# Renders the HTML the managers work on once parsed. Bilingual strings live in
# data-en / data-es; card text is placeholder until content/*.json arrives.
# ------------------------------------------------------

from __future__ import annotations
from html import escape
from typing import Dict, List

from portfolio.decor import ICON_IDLE
from portfolio.page import Document

LOADING = "Loading..."

SITE_TITLE = {"en": "Jr. Game & Narrative Designer", "es": "Jr. Game & Narrative Designer"}

# --- Sections (tab order matters: digits 1-5 map onto it) ---
SECTIONS: List[Dict] = [
    {"id": "interactive-fictions", "en": "Interactive Fictions", "es": "Ficciones Interactivas"},
    {"id": "games", "en": "Games", "es": "Juegos"},
    {"id": "writing", "en": "Writing", "es": "Escritura"},
    {"id": "about", "en": "About", "es": "Sobre mí"},
    {"id": "contact", "en": "Contact", "es": "Contacto"},
]

# --- Project cards (text is filled from content/<slug>.json) ---
PROJECTS: List[Dict] = [
    {"slug": "echoes-of-the-tide", "section": "interactive-fictions", "links": "per-locale"},
    {"slug": "the-last-letter", "section": "interactive-fictions", "links": "generic"},
    {"slug": "lanternfall", "section": "games", "links": "generic"},
    {"slug": "paper-moons", "section": "games", "links": "per-locale"},
    {"slug": "salt-and-ink", "section": "writing", "links": "generic"},
]

CTA = {"en": "View project", "es": "Ver proyecto"}
CTA_EN_ONLY = {"en": "English version", "es": "Versión en inglés"}
CTA_ES_ONLY = {"en": "Spanish version", "es": "Versión en español"}

CONTACT = {
    "email": "hello@example.com",
    "fiverr": "https://www.fiverr.com/",
    "itch": "https://itch.io/",
}


def localized(tag: str, text: Dict[str, str], cls: str = "", **attrs) -> str:
    """Element whose text follows the language: data-en / data-es carry both."""
    extra = "".join(f' {k.replace("_", "-")}="{escape(str(v))}"' for k, v in attrs.items())
    class_attr = f' class="{cls}"' if cls else ""
    return (f'<{tag}{class_attr} data-en="{escape(text["en"])}" data-es="{escape(text["es"])}"{extra}>'
            f'{escape(text["en"])}</{tag}>')


def project_card(project: Dict) -> str:
    slug = project["slug"]
    if project.get("links") == "per-locale":
        links = (localized("a", CTA_EN_ONLY, cls="project-link-en", href="#", target="_blank")
                 + localized("a", CTA_ES_ONLY, cls="project-link-es", href="#", target="_blank"))
    else:
        links = localized("a", CTA, cls="project-link", href="#", target="_blank")
    return f"""
    <article class="project-card" data-project="{escape(slug)}">
      <h3 class="project-title">{escape(slug.replace("-", " ").title())}</h3>
      <p class="project-genre"></p>
      <p class="project-description">{LOADING}</p>
      {links}
    </article>"""


def _about_section() -> str:
    return f"""
    <div class="about-content">
      <p id="about-paragraph-1">{LOADING}</p>
      <p id="about-paragraph-2">{LOADING}</p>
    </div>"""


def _contact_section() -> str:
    return f"""
    <div class="contact-content">
      {localized("p", {"en": "Let's make something together.", "es": "Hagamos algo juntos."})}
      <p class="contact-email">{escape(CONTACT["email"])}</p>
      <a href="{CONTACT["fiverr"]}" target="_blank"><img class="fiverr-contact-icon" src="{ICON_IDLE}" alt="Fiverr"></a>
      <a href="{CONTACT["itch"]}" target="_blank">itch.io</a>
    </div>"""


def page_markup() -> str:
    tabs = "".join(
        localized("a", s, cls="nav-tab", href=f"#{s['id']}", data_section=s["id"]) for s in SECTIONS
    )
    sections = []
    for s in SECTIONS:
        if s["id"] == "about":
            body = _about_section()
        elif s["id"] == "contact":
            body = _contact_section()
        else:
            cards = "".join(project_card(p) for p in PROJECTS if p["section"] == s["id"])
            body = f'<div class="project-grid">{cards}</div>'
        sections.append(
            f'<section id="{s["id"]}" class="section">'
            f'{localized("h2", s, cls="section-title")}{body}</section>'
        )
    return f"""<!DOCTYPE html>
<html><body>
  <header>
    {localized("h1", SITE_TITLE, cls="site-title")}
    <div class="lang-switch">
      <button id="lang-en" class="lang-btn">EN</button>
      <button id="lang-es" class="lang-btn">ES</button>
    </div>
    <a href="{CONTACT["fiverr"]}" target="_blank"><img class="fiverr-icon" src="{ICON_IDLE}" alt="Fiverr"></a>
  </header>
  <nav class="nav-tabs">{tabs}</nav>
  <main class="sections">{"".join(sections)}</main>
</body></html>"""


def build_document() -> Document:
    """Fresh parsed page; one per visitor session."""
    return Document(page_markup())
