"""Shared rendering for every display surface.

A surface owns a mount point in the document (a bs4 `Tag`) and knows how to
turn its current data into markup. Everything else lives here.
"""

from abc import ABC, abstractmethod
from enum import Enum
import inspect
import logging
from typing import Any, Callable

from bs4 import BeautifulSoup, NavigableString, Tag
from jinja2 import Environment


logger = logging.getLogger(__name__)


type Handler = Callable[..., Any]


class Status(Enum):
    empty = "empty"
    populated = "populated"
    error_shown = "error_shown"


class Event(Enum):
    render = "render"
    search = "search"
    update_servings = "update_servings"
    add_bookmark = "add_bookmark"
    page_click = "page_click"
    upload = "upload"
    toggle_window = "toggle_window"


def is_empty(data: Any) -> bool:
    return data is None or (isinstance(data, (list, tuple)) and len(data) == 0)


class View(ABC):
    error_message = ""
    message = ""

    def __init__(
        self,
        parent_element: Tag | None,
        *,
        environment: Environment,
    ) -> None:
        self.parent_element = parent_element
        self.env = environment
        self.status = Status.empty
        self._data: Any = None
        self._handlers: dict[Event, Handler] = {}

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(status={self.status.value})>"

    @property
    def data(self) -> Any:
        return self._data

    @property
    def html(self) -> str:
        if self.parent_element is None:
            return ""
        return self.parent_element.decode_contents()

    @abstractmethod
    def generate_markup(self) -> str:
        """Markup for `self.data`."""

    def _mount(self, markup: str) -> None:
        if self.parent_element is None:
            return
        self.parent_element.clear()
        fragment = BeautifulSoup(markup, "html.parser")
        for node in list(fragment.contents):
            self.parent_element.append(node.extract())

    def spinner(self) -> None:
        self._mount(self.env.get_template("spinner.html").render())

    def render(self, data: Any, render: bool = True) -> str | None:
        """Show `data`, or return its markup when `render` is false.

        Nothing to show falls back to the error message.
        """
        if is_empty(data):
            self.render_error()
            return None

        self._data = data
        markup = self.generate_markup()

        if not render:
            return markup

        self._mount(markup)
        self.status = Status.populated
        return None

    def render_message(self, message: str | None = None) -> None:
        message = self.message if message is None else message
        self._mount(self.env.get_template("message.html").render(message=message))

    def render_error(self, message: str | None = None) -> None:
        message = self.error_message if message is None else message
        self._mount(self.env.get_template("error.html").render(message=message))
        self.status = Status.error_shown

    def update(self, data: Any) -> None:
        """Patch the mounted tree in place so it shows `data`.

        Old and new nodes are paired by document order, nothing else. Only
        use this when both trees have the same shape, e.g. a new servings
        count or a toggled icon. Nodes past the shorter tree are left alone.
        Empty data patches nothing and leaves the status as it was.
        """
        if is_empty(data) or self.parent_element is None:
            return
        self._data = data
        new_dom = BeautifulSoup(self.generate_markup(), "html.parser")
        new_elements = new_dom.find_all(True)
        cur_elements = self.parent_element.find_all(True)

        for new_el, cur_el in zip(new_elements, cur_elements):
            if new_el == cur_el:
                continue
            first = new_el.contents[0] if new_el.contents else None
            if isinstance(first, NavigableString) and first.strip():
                cur_el.string = new_el.get_text()
            for name, value in new_el.attrs.items():
                cur_el[name] = list(value) if isinstance(value, list) else value

        self.status = Status.populated

    def add_handler(self, event: Event, handler: Handler) -> None:
        if event in self._handlers:
            raise ValueError(f"{type(self).__name__} already handles {event.value}")
        self._handlers[event] = handler

    async def dispatch(self, event: Event, *args: Any) -> Any:
        handler = self._handlers.get(event)
        if handler is None:
            logger.warning("%s has no %s handler", type(self).__name__, event.value)
            return None
        result = handler(*args)
        if inspect.isawaitable(result):
            result = await result
        return result
