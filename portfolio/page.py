# portfolio/page.py: parsed page markup + a thin event layer
# -----------------------------------------------------------
# The page is HTML parsed with BeautifulSoup. The managers query it with
# select()/select_one() and write to it through the Document helpers below,
# which keep a revision count. Listeners are attached per tag.
# -----------------------------------------------------------

from __future__ import annotations
from collections import defaultdict
from typing import Callable, Dict, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

Handler = Callable[["Event"], None]


# -----------------------------
# Events
# -----------------------------
class Event:
    def __init__(self, type: str):
        self.type = type
        self.target: Optional[Tag] = None
        self.default_prevented = False

    def prevent_default(self) -> None:
        self.default_prevented = True


class KeyEvent(Event):
    def __init__(self, key: str, ctrl: bool = False, meta: bool = False,
                 alt: bool = False, shift: bool = False):
        super().__init__("keydown")
        self.key = key
        self.ctrl = ctrl
        self.meta = meta
        self.alt = alt
        self.shift = shift

    @property
    def has_modifier(self) -> bool:
        return self.ctrl or self.meta or self.alt or self.shift


def has_class(tag: Tag, name: str) -> bool:
    return name in tag.get("class", ())


# -----------------------------
# Document
# -----------------------------
class Document:
    def __init__(self, markup: str, parser: str = "lxml"):
        self.soup = BeautifulSoup(markup, parser)
        self.revision = 0
        # id(tag) -> (tag, listeners); None is the document itself
        self._listeners: Dict[Optional[int], Tuple[Optional[Tag], Dict[str, List[Handler]]]] = {}

    @property
    def body(self) -> Tag:
        return self.soup.body

    # --- queries ---
    def select(self, selector: str) -> List[Tag]:
        return self.soup.select(selector)

    def select_one(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)

    def get_element_by_id(self, element_id: str) -> Optional[Tag]:
        return self.soup.find(id=element_id)

    # --- writes (each counted in revision) ---
    def set_text(self, tag: Tag, text: str) -> None:
        if tag.string == text:
            return
        tag.string = text
        self.revision += 1

    def set_attribute(self, tag: Tag, name: str, value: str) -> None:
        if tag.get(name) == value:
            return
        tag[name] = value
        self.revision += 1

    def add_class(self, tag: Tag, name: str) -> None:
        classes = list(tag.get("class", []))
        if name in classes:
            return
        tag["class"] = classes + [name]
        self.revision += 1

    def remove_class(self, tag: Tag, name: str) -> None:
        classes = list(tag.get("class", []))
        if name not in classes:
            return
        classes.remove(name)
        if classes:
            tag["class"] = classes
        else:
            del tag["class"]
        self.revision += 1

    # --- events ---
    def on(self, event_type: str, handler: Handler, target: Optional[Tag] = None) -> None:
        key = None if target is None else id(target)
        _, listeners = self._listeners.setdefault(key, (target, defaultdict(list)))
        listeners[event_type].append(handler)

    def listener_count(self, event_type: str, target: Optional[Tag] = None) -> int:
        entry = self._listeners.get(None if target is None else id(target))
        return len(entry[1].get(event_type, ())) if entry else 0

    def dispatch(self, event: Event, target: Optional[Tag] = None) -> Event:
        if target is not None and event.target is None:
            event.target = target
        entry = self._listeners.get(None if target is None else id(target))
        if entry:
            for handler in list(entry[1].get(event.type, ())):
                handler(event)
        return event

    def click(self, tag: Tag) -> Event:
        return self.dispatch(Event("click"), tag)
