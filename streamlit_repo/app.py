# app.py: Bilingual portfolio (EN/ES) · tabbed sections · JSON content
# ----------------------------------------------------------------------
#  • Page markup is HTML parsed with BeautifulSoup (subpages/portfolio_page.py)
#  • Language + section state live in the managers, kept per session
#  • Buttons stand in for clicks and arrow keys; the model renders as HTML
#  • Language preference + section persist in the query string
# ----------------------------------------------------------------------

from __future__ import annotations
import asyncio
from html import escape
from typing import Callable, List

import streamlit as st
import structlog
from bs4 import Tag

from portfolio.config import Settings
from portfolio.log import configure_logging
from portfolio.navigation import MappingAddress
from portfolio.page import has_class
from portfolio.preferences import JsonFileStore, PreferenceStore
from portfolio.site import PortfolioSite
from subpages.portfolio_page import SITE_TITLE, build_document

SETTINGS = Settings.from_env()
configure_logging(SETTINGS.log_level, SETTINGS.json_logs)
logger = structlog.get_logger()

# -----------------------------
# Page config + CSS
# -----------------------------
st.set_page_config(
    page_title=f"Portfolio — {SITE_TITLE['en']}",
    page_icon="🎲",
    layout="wide",
    initial_sidebar_state="collapsed",
)

st.markdown("""
<style>
/* only the active panel is visible; .active is set by the navigator */
.sections .section { display: none; }
.sections .section.active { display: block; animation: panel-in .35s ease-out; }
@keyframes panel-in { from { opacity: 0; transform: translateY(6px); } to { opacity: 1; transform: none; } }

.section-title { font-weight: 800; font-size: 1.6rem; margin: 4px 0 14px; }

.project-grid {
  display: grid;
  grid-template-columns: repeat(auto-fill, minmax(280px, 1fr));
  gap: 16px;
}
.project-card {
  border: 1px solid rgba(0,0,0,.08);
  border-radius: 12px;
  padding: 14px;
  box-shadow: 0 2px 6px rgba(0,0,0,0.06);
  display: flex;
  flex-direction: column;
  min-height: 220px;
  opacity: 0;
}
.project-card.fade-in, .about-content.fade-in, .contact-content.fade-in { opacity: 1; transition: opacity .4s ease-in; }
.project-title { margin: 0 0 4px; font-weight: 700; font-size: 1.1rem; }
.project-genre { margin: 0 0 8px; font-size: .85rem; opacity: .7; }
.project-description { flex: 1; line-height: 1.5; }
.project-card a { margin-top: 8px; font-weight: 600; }

.about-content p { max-width: 68ch; line-height: 1.6; font-size: 1.02rem; }
.fiverr-contact-icon { width: 28px; height: 28px; vertical-align: middle; }
</style>
""", unsafe_allow_html=True)

# -----------------------------
# Helpers (session, dispatch)
# -----------------------------
def preference_backend():
    if SETTINGS.preferences_file:
        return JsonFileStore(SETTINGS.preferences_file)
    return st.query_params

def run_on_page(site: PortfolioSite, action: Callable[[], None]):
    """Run one page interaction inside a loop and wait for its background work."""
    async def _go():
        action()
        await site.settle()
    asyncio.run(_go())

def get_site() -> PortfolioSite:
    site = st.session_state.get("site")
    if site is None:
        site = PortfolioSite(
            build_document(),
            settings=SETTINGS,
            preferences=PreferenceStore(preference_backend()),
            address=MappingAddress(st.query_params, key="section"),
        )
        def _boot():
            site.start(); site.on_load()
        run_on_page(site, _boot)
        st.session_state["site"] = site
        logger.info("Visitor session ready", lang=site.language.current_lang.value,
                    section=site.navigation.current_section)
    return site

def button_row(elements: List[Tag], key_prefix: str, site: PortfolioSite):
    cols = st.columns(len(elements))
    for col, el in zip(cols, elements):
        with col:
            kind = "primary" if has_class(el, "active") else "secondary"
            if st.button(el.get_text(strip=True), key=f"{key_prefix}_{el.get('id') or el.get('data-section')}",
                         type=kind, use_container_width=True):
                run_on_page(site, lambda el=el: site.document.click(el)); st.rerun()

# -----------------------------
# Render
# -----------------------------
site = get_site()
doc = site.document

head_l, head_r = st.columns([4, 1], vertical_alignment="center")
with head_l:
    title = doc.select_one(".site-title")
    st.markdown(f"<h1 class='site-title'>{escape(title.get_text(strip=True)) if title is not None else ''}</h1>", unsafe_allow_html=True)
with head_r:
    button_row(doc.select(".lang-btn"), "lang", site)

prev_col, tabs_col, next_col = st.columns([0.6, 10, 0.6], vertical_alignment="center")
with prev_col:
    if st.button("◀", key="key_prev", help="Previous tab (← / ↑)"):
        run_on_page(site, lambda: site.press_key("ArrowLeft")); st.rerun()
with tabs_col:
    button_row(doc.select(".nav-tab"), "tab", site)
with next_col:
    if st.button("▶", key="key_next", help="Next tab (→ / ↓)"):
        run_on_page(site, lambda: site.press_key("ArrowRight")); st.rerun()

st.markdown("---")
main = doc.select_one("main")
if main is not None:
    st.markdown(str(main), unsafe_allow_html=True)
