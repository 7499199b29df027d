import inspect

from bs4 import Tag

from app.html.document import MountPointMissing
from app.html.view import Event, Handler


class SearchView:
    """The search form. Not a surface, it only reads the query field."""

    def __init__(self, form: Tag) -> None:
        self.form = form
        self._handler: Handler | None = None

    @property
    def field(self) -> Tag:
        field = self.form.select_one(".search__field")
        if field is None:
            raise MountPointMissing(".search__field not in the search form")
        return field

    def get_query(self) -> str:
        query = str(self.field.get("value", ""))
        self.field["value"] = ""
        return query

    def add_handler(self, event: Event, handler: Handler) -> None:
        if event is not Event.search:
            raise ValueError(f"SearchView does not emit {event.value}")
        if self._handler is not None:
            raise ValueError("SearchView already handles search")
        self._handler = handler

    async def submit(self, query: str) -> None:
        self.field["value"] = query
        if self._handler is None:
            return
        result = self._handler()
        if inspect.isawaitable(result):
            await result
