"""Tests for tab navigation, keyboard shortcuts and deep links."""

import asyncio

import pytest

from portfolio.navigation import Address, MappingAddress, NavigationManager
from portfolio.page import Document, KeyEvent

from conftest import TEST_PAGE


def _active_tab(document):
    return [t["data-section"] for t in document.select(".nav-tab.active")]


def _active_sections(document):
    return [s["id"] for s in document.select(".section.active")]


@pytest.fixture
def address():
    return Address()


@pytest.fixture
def nav(document, address):
    manager = NavigationManager(document, address, default_section="one")
    manager.initialize()
    manager.bind_keyboard()
    return manager


class TestSwitchToSection:

    def test_initialize_activates_default(self, nav, document, address):
        assert _active_tab(document) == ["one"]
        assert _active_sections(document) == ["one"]
        assert address.fragment == "one"

    def test_switch_moves_the_single_active_pair(self, nav, document, address):
        assert nav.switch_to_section("three")
        assert _active_tab(document) == ["three"]
        assert _active_sections(document) == ["three"]
        assert nav.current_section == "three"
        assert address.fragment == "three"

    def test_unknown_section_is_a_noop(self, nav, document, address):
        before = document.revision
        assert nav.switch_to_section("missing") is False
        assert document.revision == before
        assert nav.current_section == "one"
        assert address.fragment == "one"

    def test_tab_without_section_is_a_noop(self, address):
        document = Document(TEST_PAGE.replace(
            "</nav>", '<a class="nav-tab" data-section="ghost">Ghost</a></nav>'))
        manager = NavigationManager(document, address, default_section="one")
        manager.initialize()
        before = document.revision
        manager.switch_to_section("ghost")
        assert document.revision == before
        assert _active_tab(document) == ["one"]

    def test_click_on_tab(self, nav, document):
        event = document.click(document.select_one('[data-section="two"]'))
        assert event.default_prevented
        assert _active_sections(document) == ["two"]


class TestKeyboard:

    def _press(self, document, key, **mods):
        return document.dispatch(KeyEvent(key, **mods))

    def test_left_from_first_wraps_to_last(self, nav, document):
        event = self._press(document, "ArrowLeft")
        assert event.default_prevented
        assert nav.current_section == "three"

    def test_right_from_last_wraps_to_first(self, nav, document):
        nav.switch_to_section("three")
        self._press(document, "ArrowRight")
        assert nav.current_section == "one"

    def test_up_and_down(self, nav, document):
        self._press(document, "ArrowDown")
        assert nav.current_section == "two"
        self._press(document, "ArrowUp")
        assert nav.current_section == "one"

    def test_digits_jump_to_existing_tabs(self, nav, document):
        self._press(document, "3")
        assert nav.current_section == "three"
        event = self._press(document, "5")
        assert event.default_prevented
        assert nav.current_section == "three"

    @pytest.mark.parametrize("mods", [{"ctrl": True}, {"meta": True}, {"alt": True}, {"shift": True}])
    def test_modifiers_disable_shortcuts(self, nav, document, mods):
        event = self._press(document, "ArrowRight", **mods)
        assert not event.default_prevented
        assert nav.current_section == "one"

    def test_other_keys_are_ignored(self, nav, document):
        event = self._press(document, "x")
        assert not event.default_prevented
        assert nav.current_section == "one"

    def test_no_active_tab(self, document):
        manager = NavigationManager(document, Address(), default_section="nowhere")
        manager.initialize()
        manager.bind_keyboard()
        document.dispatch(KeyEvent("ArrowRight"))
        assert manager.current_section == "one"

    def test_keyboard_without_tabs(self):
        doc = Document("<body><p>nothing</p></body>")
        manager = NavigationManager(doc, Address())
        manager.bind_keyboard()
        assert not doc.dispatch(KeyEvent("ArrowLeft")).default_prevented


class TestDeepLink:

    @pytest.mark.asyncio
    async def test_deep_link_applies_after_delay(self, document):
        address = Address("#three")
        manager = NavigationManager(document, address, default_section="one")
        linked = address.fragment
        manager.initialize()
        manager.schedule_deep_link(linked, delay=0.01)
        assert manager.current_section == "one"
        await manager.settle()
        assert manager.current_section == "three"
        assert address.fragment == "three"

    @pytest.mark.asyncio
    async def test_empty_fragment_schedules_nothing(self, nav):
        nav.schedule_deep_link("", delay=0.01)
        assert len(nav.tasks) == 0
        await asyncio.sleep(0.02)
        assert nav.current_section == "one"

    def test_mapping_address(self):
        params = {"section": "two"}
        address = MappingAddress(params)
        assert address.fragment == "two"
        address.replace_fragment("#three")
        assert params == {"section": "three"}
        assert MappingAddress({}).fragment == ""
