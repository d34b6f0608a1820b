# portfolio/preferences.py: persisted language preference
# ---------------------------------------------------------

from __future__ import annotations
import json
from pathlib import Path
from typing import Dict, Iterator, MutableMapping, Optional

import structlog

from portfolio.content import Locale
from portfolio.errors import UnsupportedLocale

logger = structlog.get_logger()

PREFERRED_LANGUAGE_KEY = "preferred-language"


class JsonFileStore(MutableMapping):
    """String key/value pairs kept in a JSON file, rewritten on every change."""

    def __init__(self, path):
        self.path = Path(path)
        self._data: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Preferences file unreadable, starting empty", file=str(self.path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.warning("Preferences file is not an object, starting empty", file=str(self.path))
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._data[key] = str(value)
        self._save()

    def __delitem__(self, key: str) -> None:
        del self._data[key]
        self._save()

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)


class PreferenceStore:
    def __init__(self, backend: Optional[MutableMapping] = None):
        self.backend = backend if backend is not None else {}

    def get_language(self) -> Optional[Locale]:
        raw = self.backend.get(PREFERRED_LANGUAGE_KEY)
        if not raw:
            return None
        try:
            return Locale.parse(raw)
        except UnsupportedLocale:
            logger.warning("Ignoring stored language", value=raw)
            return None

    def set_language(self, locale: Locale) -> None:
        self.backend[PREFERRED_LANGUAGE_KEY] = Locale.parse(locale).value
