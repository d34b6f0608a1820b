"""
Pytest fixtures for the portfolio tests.

Parses a small page covering every element role the managers touch,
and an in-memory content source that counts requests.
"""

from typing import Any, Dict, Optional, Set

import pytest

from portfolio.content import ContentRepository, ContentSource
from portfolio.errors import ContentUnavailable
from portfolio.page import Document


ABOUT = {"paragraphs": {"en": ["A", "B"], "es": ["C", "D"]}}

PROJECTS = {
    "tide": {
        "title": {"en": "Echoes", "es": "Ecos"},
        "genre": {"en": "Mystery", "es": "Misterio"},
        "description": {"en": "A town forgets.", "es": "Un pueblo olvida."},
        "link": {"en": "x"},
    },
    "moons": {
        "title": {"en": "Paper Moons", "es": "Lunas de Papel"},
        "genre": {"en": "Card game", "es": "Juego de cartas"},
        "description": {"en": "Two players.", "es": "Dos jugadores."},
        "link": {"en": "https://en.example", "es": "https://es.example"},
    },
}


class FakeSource(ContentSource):
    """Serves payloads from a dict; names in `failing` raise ContentUnavailable."""

    def __init__(self, payloads: Optional[Dict[str, Any]] = None, failing: Optional[Set[str]] = None):
        self.payloads = dict(payloads or {})
        self.failing = set(failing or ())
        self.calls = []

    def get_json(self, name: str, token: Optional[int] = None) -> Any:
        self.calls.append((name, token))
        if name in self.failing or name not in self.payloads:
            raise ContentUnavailable(name, "unreachable")
        return self.payloads[name]


TEST_PAGE = """
<body>
  <button id="lang-en" class="lang-btn">EN</button>
  <button id="lang-es" class="lang-btn">ES</button>
  <h1 id="greeting" data-en="Hello" data-es="Hola">Hello</h1>
  <p id="partial" data-en="Only English" data-es="">Only English</p>
  <p id="plain">untouched</p>
  <nav>
    <a class="nav-tab" data-section="one">One</a>
    <a class="nav-tab" data-section="two">Two</a>
    <a class="nav-tab" data-section="three">Three</a>
  </nav>
  <section id="one" class="section about-content">
    <p id="about-paragraph-1">Loading...</p>
    <p id="about-paragraph-2">Loading...</p>
  </section>
  <section id="two" class="section">
    <article class="project-card" data-project="tide">
      <h3 class="project-title">tide</h3>
      <p class="project-genre"></p>
      <p class="project-description">Loading...</p>
      <a class="project-link-en" href="#">Play</a>
      <a class="project-link-es" href="#">Jugar</a>
    </article>
    <article class="project-card" data-project="moons">
      <h3 class="project-title">moons</h3>
      <p class="project-genre"></p>
      <p class="project-description">Loading...</p>
      <a class="project-link" href="#">View</a>
    </article>
  </section>
  <section id="three" class="section contact-content">
    <a href="#"><img class="fiverr-contact-icon" src="icons/fiverr-black.svg"></a>
  </section>
</body>
"""


def build_test_document(markup: str = TEST_PAGE) -> Document:
    return Document(markup)


@pytest.fixture
def document() -> Document:
    return build_test_document()


@pytest.fixture
def source() -> FakeSource:
    payloads = {"about.json": ABOUT}
    payloads.update({f"{pid}.json": data for pid, data in PROJECTS.items()})
    return FakeSource(payloads)


@pytest.fixture
def repo(source) -> ContentRepository:
    return ContentRepository(source)
