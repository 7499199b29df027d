from bs4 import Tag
from jinja2 import Environment

from app.html.preview import PreviewView
from app.html.view import View


class ResultsView(View):
    error_message = "No recipe found for your query"
    message = ""

    def __init__(
        self,
        parent_element: Tag | None,
        *,
        environment: Environment,
        preview: PreviewView,
    ) -> None:
        super().__init__(parent_element, environment=environment)
        self.preview = preview

    def generate_markup(self) -> str:
        return "".join(self.preview.render(item, False) or "" for item in self.data)


class BookmarksView(ResultsView):
    error_message = "No Bookmarks Yet"
