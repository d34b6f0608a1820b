# portfolio/content.py: locales, content records, content sources + cache
# -------------------------------------------------------------------------

from __future__ import annotations
import asyncio
import json
import re
import time
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import requests
import structlog

from portfolio.errors import ContentUnavailable, UnsupportedLocale

logger = structlog.get_logger()


class Locale(str, Enum):
    EN = "en"
    ES = "es"

    @classmethod
    def parse(cls, value) -> "Locale":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedLocale(value) from None

    @property
    def other(self) -> "Locale":
        return Locale.ES if self is Locale.EN else Locale.EN

    @property
    def attribute(self) -> str:
        """Name of the element attribute holding this locale's text."""
        return f"data-{self.value}"


DEFAULT_LOCALE = Locale.EN


def _localized(payload: Dict[str, Any], key: str) -> Dict[Locale, str]:
    raw = payload.get(key)
    if not isinstance(raw, dict):
        return {}
    out: Dict[Locale, str] = {}
    for loc in Locale:
        value = raw.get(loc.value)
        if isinstance(value, str):
            out[loc] = value
    return out


# -----------------------------
# Records
# -----------------------------
@dataclass
class AboutContent:
    paragraphs: Dict[Locale, List[str]] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any, name: str = "about.json") -> "AboutContent":
        if not isinstance(payload, dict):
            raise ContentUnavailable(name, "payload is not an object")
        raw = payload.get("paragraphs")
        paragraphs: Dict[Locale, List[str]] = {}
        if isinstance(raw, dict):
            for loc in Locale:
                items = raw.get(loc.value)
                if isinstance(items, list):
                    paragraphs[loc] = [p for p in items if isinstance(p, str)]
        return cls(paragraphs)

    def for_locale(self, locale: Locale) -> List[str]:
        return self.paragraphs.get(locale, [])


@dataclass
class ProjectContent:
    title: Dict[Locale, str] = field(default_factory=dict)
    genre: Dict[Locale, str] = field(default_factory=dict)
    description: Dict[Locale, str] = field(default_factory=dict)
    link: Dict[Locale, str] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any, name: str = "project") -> "ProjectContent":
        if not isinstance(payload, dict):
            raise ContentUnavailable(name, "payload is not an object")
        return cls(
            title=_localized(payload, "title"),
            genre=_localized(payload, "genre"),
            description=_localized(payload, "description"),
            link=_localized(payload, "link"),
        )

    def link_for(self, locale: Locale) -> Optional[str]:
        """The locale's link, else the other locale's link."""
        return self.link.get(locale) or self.link.get(locale.other) or None


# -----------------------------
# Sources
# -----------------------------
class CacheBuster:
    """Strictly increasing tokens, seeded from the wall clock in ms."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._last = -1

    def next(self) -> int:
        self._last = max(int(self._clock() * 1000), self._last + 1)
        return self._last


class ContentSource:
    def get_json(self, name: str, token: Optional[int] = None) -> Any:
        raise NotImplementedError


class HttpContentSource(ContentSource):
    NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}

    def __init__(self, base_url: str, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def url_for(self, name: str) -> str:
        return f"{self.base_url}/{name}"

    def get_json(self, name: str, token: Optional[int] = None) -> Any:
        params = {"v": token} if token is not None else None
        try:
            resp = self.session.get(self.url_for(name), params=params,
                                    headers=self.NO_CACHE_HEADERS, timeout=self.timeout)
        except requests.RequestException as e:
            raise ContentUnavailable(name, f"request failed: {e}", e) from e
        if not resp.ok:
            raise ContentUnavailable(name, f"HTTP {resp.status_code}")
        try:
            return resp.json()
        except ValueError as e:
            raise ContentUnavailable(name, f"malformed JSON: {e}", e) from e


class FileContentSource(ContentSource):
    def __init__(self, base_dir):
        self.base_dir = Path(base_dir)

    def get_json(self, name: str, token: Optional[int] = None) -> Any:
        path = self.base_dir / name
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except OSError as e:
            raise ContentUnavailable(name, f"cannot read {path}: {e}", e) from e
        except ValueError as e:
            raise ContentUnavailable(name, f"malformed JSON: {e}", e) from e


def source_from_base(base: str, timeout: Optional[float] = None) -> ContentSource:
    if base.startswith(("http://", "https://")):
        return HttpContentSource(base, timeout=timeout)
    return FileContentSource(base)


# -----------------------------
# Repository (in-memory cache)
# -----------------------------
ABOUT_FILE = "about.json"
PROJECT_ID = re.compile(r"[A-Za-z0-9][\w-]*")


class ContentRepository:
    """Async access to content records.

    Successful loads are cached for the life of the repository and never
    refreshed. Failures are not cached.
    """

    def __init__(self, source: ContentSource, buster: Optional[CacheBuster] = None):
        self.source = source
        self.buster = buster or CacheBuster()
        self.request_count: Counter = Counter()
        self._about: Optional[AboutContent] = None
        self._projects: Dict[str, ProjectContent] = {}

    async def _fetch(self, name: str) -> Any:
        self.request_count[name] += 1
        token = self.buster.next()
        logger.debug("Fetching content", name=name, token=token)
        return await asyncio.to_thread(self.source.get_json, name, token)

    async def about(self) -> AboutContent:
        if self._about is None:
            payload = await self._fetch(ABOUT_FILE)
            self._about = AboutContent.from_payload(payload, ABOUT_FILE)
        return self._about

    async def project(self, project_id: str) -> ProjectContent:
        cached = self._projects.get(project_id)
        if cached is not None:
            return cached
        name = f"{project_id}.json"
        if not PROJECT_ID.fullmatch(project_id):
            raise ContentUnavailable(name, "invalid project id")
        content = ProjectContent.from_payload(await self._fetch(name), name)
        self._projects[project_id] = content
        return content
