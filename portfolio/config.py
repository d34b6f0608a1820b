# portfolio/config.py: settings (env overrides on top of module defaults)
# -------------------------------------------------------------------------

from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

REPO_ROOT = Path(__file__).resolve().parent.parent

# --- Defaults ---
DEFAULT_CONTENT_BASE = str(REPO_ROOT / "content")
DEFAULT_SECTION = "interactive-fictions"
DEEP_LINK_DELAY = 0.1   # seconds; lets the first render settle
FADE_STEP = 0.1         # seconds between staggered fade-ins

_TRUTHY = {"1", "true", "yes", "on"}


def _float(env: Mapping[str, str], key: str, default: Optional[float]) -> Optional[float]:
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    content_base: str = DEFAULT_CONTENT_BASE
    default_section: str = DEFAULT_SECTION
    deep_link_delay: float = DEEP_LINK_DELAY
    fade_step: float = FADE_STEP
    fetch_timeout: Optional[float] = None
    log_level: str = "INFO"
    json_logs: bool = False
    preferences_file: Optional[str] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            content_base=env.get("PORTFOLIO_CONTENT_BASE") or DEFAULT_CONTENT_BASE,
            default_section=env.get("PORTFOLIO_DEFAULT_SECTION") or DEFAULT_SECTION,
            deep_link_delay=_float(env, "PORTFOLIO_DEEP_LINK_DELAY", DEEP_LINK_DELAY),
            fade_step=_float(env, "PORTFOLIO_FADE_STEP", FADE_STEP),
            fetch_timeout=_float(env, "PORTFOLIO_FETCH_TIMEOUT", None),
            log_level=(env.get("PORTFOLIO_LOG_LEVEL") or "INFO").upper(),
            json_logs=env.get("PORTFOLIO_JSON_LOGS", "").strip().lower() in _TRUTHY,
            preferences_file=env.get("PORTFOLIO_PREFERENCES_FILE") or None,
        )
